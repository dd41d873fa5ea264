import os

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse

from ..adapters.io.path_resolver import resolve_upload_path
from ..templating import absolute_url, image_path, render_template

router = APIRouter(tags=["images"])

# Served media types by extension; anything unknown is sent as a download.
MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
    ".ico": "image/x-icon",
}
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def media_type_for(filename: str) -> str:
    _, ext = os.path.splitext(filename)
    return MEDIA_TYPES.get(ext.lower(), DEFAULT_MEDIA_TYPE)


@router.get("/image/{filename:path}")
def get_image(request: Request, filename: str):
    path = resolve_upload_path(request.app.state.config.upload_dir, filename)
    return FileResponse(path, media_type=media_type_for(path))


@router.get("/view/{filename:path}", response_class=HTMLResponse)
def view_image(request: Request, filename: str):
    path = resolve_upload_path(request.app.state.config.upload_dir, filename)
    name = os.path.basename(path)
    return render_template(
        request,
        "view_image.html",
        {
            "filename": name,
            "image_src": image_path(name),
            "image_url": absolute_url(request, image_path(name)),
        },
    )
