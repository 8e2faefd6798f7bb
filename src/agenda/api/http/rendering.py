"""HTML rendering for the server-side pages."""

from pathlib import Path
from typing import Any

from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.agenda.core.i18n import t
from src.agenda.runtime.context import get_config

TEMPLATE_DIR = Path(__file__).parent / "templates"


def get_template_env() -> Environment:
    """Get Jinja2 environment for page rendering."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
    )
    env.globals["t"] = t
    return env


_env = get_template_env()


def render_page(template_name: str, context: dict[str, Any], status_code: int = 200) -> HTMLResponse:
    config = get_config()
    content = _env.get_template(template_name).render(
        app_title=config.app.title,
        locale=config.app.locale,
        **context,
    )
    return HTMLResponse(content, status_code=status_code)
