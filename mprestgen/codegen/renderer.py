"""Template rendering for generated Java sources.

Templates are Jinja2 files shipped in ``mprestgen/codegen/templates``; a
custom template directory can be supplied to override them.
"""

from pathlib import Path
from typing import Any

import jinja2

from mprestgen.exceptions import TemplateRenderError

TEMPLATES_DIR = Path(__file__).parent.resolve() / 'templates'

API_TEMPLATE = 'api.java.jinja2'
MODEL_TEMPLATE = 'model.java.jinja2'


def java_string(value: Any) -> str:
    """Escape a value for use inside a Java string literal."""
    text = str(value)
    return (
        text.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('\r', '\\r')
    )


def javadoc(value: Any) -> str:
    """Make text safe inside a Javadoc comment."""
    return str(value).replace('*/', '*&#47;').strip()


class TemplateRenderer:
    """Renders named templates with a context mapping.

    Example:
        >>> renderer = TemplateRenderer()
        >>> source = renderer.render('model.java.jinja2', context)
    """

    def __init__(self, template_dir: str | Path | None = None):
        search_path = [str(TEMPLATES_DIR)]
        if template_dir is not None:
            search_path.insert(0, str(template_dir))
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(search_path),
            undefined=jinja2.StrictUndefined,
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters['java_string'] = java_string
        self.env.filters['javadoc'] = javadoc

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template.

        Raises:
            TemplateRenderError: If the template is missing or fails.
        """
        artifact = context.get('class_name')
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateRenderError(template_name, artifact, cause=e) from e
