"""Jinja2 rendering of page fragments and documents.

Templates live in the ``opportunity_site.rendering`` package under
``templates/``. Autoescaping is on, and undefined variables raise so that a
missing view field fails the render instead of printing nothing.
"""

from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from opportunity_site.logging import get_logger

from .exceptions import TemplateRenderError

logger = get_logger(__name__, component="rendering")


class TemplateRenderer:
    """Renders named templates with a view context.

    Loaded templates are cached by the Jinja2 environment, so one renderer
    should be reused for a whole build.
    """

    def __init__(self, template_dir: str = "templates"):
        """Initialize Jinja2 environment.

        Args:
            template_dir: Directory name within the opportunity_site.rendering package
        """
        self.env = Environment(
            loader=PackageLoader("opportunity_site.rendering", template_dir),
            autoescape=True,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        logger.debug(
            f"Initialized TemplateRenderer with templates from {template_dir}",
            extra={"event": "rendering.templates.initialized", "template_dir": template_dir},
        )

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render one template.

        Args:
            template_name: File name under the template directory
            context: Template variables

        Returns:
            Rendered markup

        Raises:
            TemplateRenderError: If the template is missing or rendering fails
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed for {template_name}: {e}"
            logger.error(
                error_msg,
                extra={"event": "rendering.template.failed", "template": template_name},
                exc_info=True,
            )
            raise TemplateRenderError(error_msg, template_name=template_name) from e
        except Exception as e:
            error_msg = f"Unexpected error rendering {template_name}: {e}"
            logger.error(
                error_msg,
                extra={"event": "rendering.template.failed", "template": template_name},
                exc_info=True,
            )
            raise TemplateRenderError(error_msg, template_name=template_name) from e
