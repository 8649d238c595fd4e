"""Project generator - materializes the template set into a new directory."""

import logging
from pathlib import Path

from jinja2 import TemplateError

from mcp_create_tool.errors import MaterializationError, PreconditionError
from mcp_create_tool.models import GenerationConfig, TemplateFile
from mcp_create_tool.template_engine import (
    create_jinja_environment,
    get_template_context,
    get_templates_dir,
    iter_template_files,
    output_relative_path,
    render_text,
)

logger = logging.getLogger(__name__)


class ProjectGenerator:
    """Renders every file of a template root into a fresh project directory."""

    def __init__(
        self,
        config: GenerationConfig,
        project_dir: Path,
        template_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.project_dir = project_dir
        self.template_dir = template_dir or get_templates_dir()
        self.env = create_jinja_environment()
        self.context = get_template_context(config)

    def generate(self) -> list[Path]:
        """Generate the project and return the written files in creation order.

        Raises:
            PreconditionError: If the project directory already exists.
            MaterializationError: If any file cannot be read, rendered or
                written. Files written before the failure are kept.
        """
        if self.project_dir.exists():
            raise PreconditionError(f"Directory '{self.project_dir}' already exists.")
        if not self.template_dir.is_dir():
            raise MaterializationError(f"Template directory '{self.template_dir}' not found")

        logger.info(f"Generating MCP server '{self.config.name}' at {self.project_dir}")

        written: list[Path] = []
        try:
            self.project_dir.mkdir(parents=True)
            for template_file in iter_template_files(self.template_dir):
                written.append(self._create_file(template_file))
        except (OSError, UnicodeError, TemplateError) as e:
            raise MaterializationError(
                f"Failed to create project in '{self.project_dir}': {e}"
            ) from e

        logger.info(f"Created {len(written)} file(s) in {self.project_dir}")
        return written

    def _create_file(self, template_file: TemplateFile) -> Path:
        """Render a single template file to its output location."""
        target_path = self.project_dir / output_relative_path(template_file.relative_path)
        target_path.parent.mkdir(parents=True, exist_ok=True)

        content = render_text(self.env, template_file.raw_content, self.context)
        target_path.write_text(content, encoding="utf-8", newline="")
        logger.debug(f"Created file: {target_path}")
        return target_path


def generate_project(
    config: GenerationConfig,
    project_dir: Path,
    template_dir: Path | None = None,
) -> Path:
    """Generate a project from a configuration.

    Args:
        config: Values substituted into the templates
        project_dir: Directory to create; must not exist yet
        template_dir: Template root, defaults to the bundled template set

    Returns:
        Path to the generated project directory
    """
    generator = ProjectGenerator(config, project_dir, template_dir)
    generator.generate()
    return project_dir
