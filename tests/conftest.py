"""
Shared fixtures: an app per test with its own temporary upload directory.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.app.adapters.io.environment import ServiceConfig, get_static_dir, get_templates_dir
from backend.app.main import create_app


# Minimal payloads carrying real magic bytes.
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00\x00" + b"\x00" * 32
SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>'
XML_SVG_BYTES = b'<?xml version="1.0" encoding="UTF-8"?>\n' + SVG_BYTES
TEXT_BYTES = b"just some plain text, definitely not an image\n"


@pytest.fixture
def upload_dir(tmp_path):
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def make_client(upload_dir):
    """Factory: ``make_client(upload_interval=0, naming="timestamp", max_upload_bytes=0)``."""
    clients = []

    def _make(**overrides) -> TestClient:
        cfg = ServiceConfig(
            upload_dir=str(upload_dir),
            static_dir=get_static_dir(),
            templates_dir=get_templates_dir(),
            upload_interval=overrides.pop("upload_interval", 0),
            naming=overrides.pop("naming", "timestamp"),
            max_upload_bytes=overrides.pop("max_upload_bytes", 0),
        )
        assert not overrides, f"unknown overrides: {overrides}"
        client = TestClient(create_app(cfg))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


def upload(client, filename="cat.png", content=PNG_BYTES, *, force_upload=None, force_name=None, json=True):
    """POST one file to /upload; returns the response."""
    data = {}
    if force_upload is not None:
        data["force_upload"] = force_upload
    if force_name is not None:
        data["force_name"] = force_name
    params = {"responseType": "json"} if json else None
    return client.post(
        "/upload",
        files={"image": (filename, content, "application/octet-stream")},
        data=data,
        params=params,
    )
