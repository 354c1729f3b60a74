"""
Jinja2 loader for assistant messages.

Every name in `Template` must have a `.jinja2` file next to this module;
a missing file fails the import. Rendered messages are returned without
the surrounding blank lines the block tags leave behind.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _check_templates():
    paths = (
        TEMPLATES_DIR / f"{getattr(Template, name)}.jinja2"
        for name in dir(Template)
        if not name.startswith("_")
    )
    missing = [path for path in paths if not path.exists()]
    if missing:
        raise FileNotFoundError(f"Message templates missing: {', '.join(map(str, missing))}")


_check_templates()


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # Messages are markdown for the chat widget, not HTML
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(default=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def render(template_name: str, **variables) -> str:
    """
    Render a message template.

    Args:
        template_name: One of the `Template` constants
        **variables: Values referenced by the template

    Returns:
        The message text, stripped of leading and trailing whitespace
    """
    template = _environment().get_template(f"{template_name}.jinja2")
    return template.render(**variables).strip()
