"""Rendering exceptions."""


class TemplateRenderError(Exception):
    """Raised when a page template fails to load or render.

    Attributes:
        template_name: Template that failed
    """

    def __init__(self, message: str, template_name: str = ""):
        super().__init__(message)
        self.template_name = template_name
