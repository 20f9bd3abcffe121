"""
Jinja2 loader for the summarization prompts.

Templates live next to this module in templates/<name>.jinja2. Every name
declared on Template must have a file; this is checked at import.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _template_names() -> list[str]:
    return [
        value for name, value in vars(Template).items()
        if not name.startswith("_") and isinstance(value, str)
    ]


def _validate_templates():
    """Fail fast at import if a declared template has no file."""
    for template_name in _template_names():
        path = TEMPLATES_DIR / f"{template_name}.jinja2"
        if not path.exists():
            raise FileNotFoundError(f"Prompt template missing: {path}")


_validate_templates()


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    # Prompts are plain text: no autoescaping, and a missing variable is a bug
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(template_name: str, **context) -> str:
    """Render a prompt template and strip surrounding whitespace."""
    template = _get_environment().get_template(f"{template_name}.jinja2")
    return template.render(**context).strip()
