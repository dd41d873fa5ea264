"""Jinja2 rendering for the HTML pages."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from .exceptions import TemplateRenderError


def make_templates(directory: str) -> Jinja2Templates:
    return Jinja2Templates(directory=directory)


def image_path(filename: str) -> str:
    return f"/image/{quote(filename)}"


def view_path(filename: str) -> str:
    return f"/view/{quote(filename)}"


def absolute_url(request: Request, path: str) -> str:
    return str(request.base_url).rstrip("/") + path


def render_template(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    templates: Jinja2Templates = request.app.state.templates
    try:
        return templates.TemplateResponse(request, name, context or {}, status_code=status_code)
    except TemplateError as e:
        raise TemplateRenderError(f"Could not render template {name}: {e}") from e
