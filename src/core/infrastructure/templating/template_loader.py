"""Code snippet template loader using Jinja2.

Templates are stored in resources/code_templates/ directory.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

# Template directory relative to this file
_TEMPLATES_DIR = (
    Path(__file__).parent.parent.parent.parent.parent / "resources" / "code_templates"
)

_env: Environment | None = None


def _get_env() -> Environment:
    """Get or create Jinja2 environment (lazy initialization)."""
    global _env
    if _env is None:
        if not _TEMPLATES_DIR.exists():
            raise FileNotFoundError(
                f"Code templates directory not found: {_TEMPLATES_DIR}"
            )
        _env = Environment(
            loader=FileSystemLoader(_TEMPLATES_DIR),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _env


def render_template(name: str, **variables: object) -> str:
    """Render a code template file.

    Args:
        name: Template file name (e.g. "python.py.j2")
        **variables: Template variables

    Returns:
        Rendered template string

    Raises:
        jinja2.TemplateNotFound: If template file not found
        jinja2.TemplateError: If template rendering fails
    """
    env = _get_env()
    template = env.get_template(name)
    return template.render(**variables).rstrip("\n")
