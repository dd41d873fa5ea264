from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ..templating import render_template

HOME_TITLE = "Image upload"

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return render_template(request, "home.html", {"title": HOME_TITLE})
