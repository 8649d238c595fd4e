"""Template engine for rendering project files."""

import logging
from collections.abc import Iterator
from pathlib import Path, PurePath
from typing import Any

from jinja2 import Environment, StrictUndefined

from mcp_create_tool.models import GenerationConfig, TemplateFile

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".ejs"
DOTFILE_PREFIX = "dotfile-"


def get_templates_dir() -> Path:
    """Get the directory containing the built-in template set."""
    return Path(__file__).parent / "template"


def create_jinja_environment() -> Environment:
    """Create a Jinja2 environment that understands EJS-style tags.

    ``<%= expr %>`` prints a value, ``<% stmt %>`` wraps a statement and
    ``<%# ... %>`` is a comment. Undefined names raise instead of rendering
    as empty strings.
    """
    return Environment(
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<%=",
        variable_end_string="%>",
        comment_start_string="<%#",
        comment_end_string="%>",
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def get_template_context(config: GenerationConfig) -> dict[str, Any]:
    """Build the template context from a generation configuration."""
    return config.template_context()


def detect_newline(content: str) -> str:
    """Return the line ending used by ``content``, defaulting to ``\\n``."""
    if "\r\n" in content:
        return "\r\n"
    if "\r" in content:
        return "\r"
    return "\n"


def render_text(env: Environment, content: str, context: dict[str, Any]) -> str:
    """Render ``content`` with ``env``, keeping its line endings.

    Text without any tag is returned as is.
    """
    if "<%" not in content:
        return content
    newline = detect_newline(content)
    if newline != env.newline_sequence:
        env = env.overlay(newline_sequence=newline)
    return env.from_string(content).render(**context)


def render_content(content: str, context: dict[str, Any]) -> str:
    """Render inline template text."""
    return render_text(create_jinja_environment(), content, context)


def is_dotfile_template(relative_path: PurePath) -> bool:
    """Return True when the file name carries the dotfile marker."""
    return relative_path.name.startswith(DOTFILE_PREFIX)


def output_relative_path(relative_path: PurePath | str) -> PurePath:
    """Map a template path to the path written in the generated project.

    ``dotfile-gitignore.ejs`` becomes ``.gitignore``; ``src/index.ts.ejs``
    becomes ``src/index.ts``. Files without the ``.ejs`` suffix keep their
    name.
    """
    relative_path = PurePath(relative_path)
    name = relative_path.name
    if name.startswith(DOTFILE_PREFIX):
        name = "." + name[len(DOTFILE_PREFIX) :]
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    return relative_path.with_name(name)


def iter_template_sources(template_root: Path) -> Iterator[tuple[Path, Path]]:
    """Yield ``(absolute path, relative path)`` for every file below ``template_root``."""
    for source in sorted(template_root.rglob("*")):
        if source.is_file():
            yield source, source.relative_to(template_root)


def iter_template_files(template_root: Path) -> Iterator[TemplateFile]:
    """Yield every template file with its raw content; directories are only traversed."""
    for source, relative in iter_template_sources(template_root):
        # decoded from bytes so that \r\n survives
        yield TemplateFile(
            relative_path=relative,
            is_dotfile=is_dotfile_template(relative),
            raw_content=source.read_bytes().decode("utf-8"),
        )


def list_template_paths(template_root: Path) -> list[tuple[str, str]]:
    """Return ``(template path, output path)`` pairs without reading file contents."""
    return [
        (relative.as_posix(), output_relative_path(relative).as_posix())
        for _, relative in iter_template_sources(template_root)
    ]
