"""API models for the upload endpoints."""

from __future__ import annotations

from pydantic import BaseModel


UPLOAD_SUCCESS_MESSAGE = "Image uploaded successfully."


class UploadResponse(BaseModel):
    """JSON body returned by ``POST /upload?responseType=json``."""

    message: str = UPLOAD_SUCCESS_MESSAGE
    filename: str
    nonce: str
