from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse

from ..exceptions import InvalidUploadError
from ..models.v1.files_models import UPLOAD_SUCCESS_MESSAGE, UploadResponse
from ..security.csp import csp_nonce
from ..services.upload_service import store_upload
from ..templating import absolute_url, image_path, render_template, view_path

router = APIRouter(tags=["upload"])


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


@router.get("/upload", response_class=HTMLResponse)
def upload_form(request: Request, nonce: str = Depends(csp_nonce)):
    return render_template(request, "upload_form.html", {"nonce": nonce})


@router.post("/upload")
def upload_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    force_upload: Optional[str] = Form(None),
    force_name: Optional[str] = Form(None),
    response_type: Optional[str] = Query(None, alias="responseType"),
    nonce: str = Depends(csp_nonce),
):
    """Accept one image from the multipart field ``image`` and store it.

    Sync on purpose: FastAPI runs it in the threadpool, and the rate gate's
    lock is held across the blocking copy.

    Form flags:
        force_upload=true  skip content sniffing and allow overwriting
        force_name=true    keep the client's filename
    Query:
        responseType=json  return UploadResponse instead of the HTML page
    """
    if image is None:
        raise InvalidUploadError("Missing form field 'image'")

    stored = store_upload(
        request.app.state.config,
        request.app.state.upload_gate,
        image.file,
        image.filename,
        force_upload=_flag(force_upload),
        force_name=_flag(force_name),
    )

    if (response_type or "").strip().lower() == "json":
        body = UploadResponse(filename=stored.filename, nonce=nonce)
        return JSONResponse(body.model_dump())

    return render_template(
        request,
        "upload_success.html",
        {
            "message": UPLOAD_SUCCESS_MESSAGE,
            "filename": stored.filename,
            "nonce": nonce,
            "image_url": absolute_url(request, image_path(stored.filename)),
            "view_url": view_path(stored.filename),
        },
    )
