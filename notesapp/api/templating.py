"""
Jinja2 view rendering shared by the routes and the error handlers.
"""

from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from notesapp.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: Optional[dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render a view with the signed-in user available to every template."""
    user = getattr(request.state, "user", None)
    base = {
        "app_name": settings.app_name,
        "current_user": user,
        "is_authenticated": user is not None,
    }
    base.update(context or {})
    return templates.TemplateResponse(request, name, base, status_code=status_code)
