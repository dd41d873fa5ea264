"""Helpers for content-sniffed uploads.

We read a small window from the head of an uploaded stream, classify it by
magic bytes, and rewind the stream so callers can copy the full payload.
"""

from __future__ import annotations

import os
import shutil
from typing import BinaryIO, Optional

import filetype


SNIFF_LEN = 512
DEFAULT_CHUNK_SIZE = 1_048_576  # 1 MiB

# In-flight uploads are written as "<TMP_PREFIX><hex>" inside the upload dir.
TMP_PREFIX = ".tmp-"

ALLOWED_PREFIXES = ("image/", "text/xml", "image/svg+xml")

_BOMS = (b"\xef\xbb\xbf", b"\xff\xfe", b"\xfe\xff")
_BINARY_BYTES = set(range(0x00, 0x09)) | {0x0B} | set(range(0x0E, 0x1B)) | set(range(0x1C, 0x20))


def read_sniff_window(stream: BinaryIO, size: int = SNIFF_LEN) -> bytes:
    """Read up to ``size`` bytes from the start of ``stream`` and rewind it."""
    stream.seek(0)
    head = stream.read(size)
    stream.seek(0)
    return head


def _strip_leading(head: bytes) -> bytes:
    for bom in _BOMS:
        if head.startswith(bom):
            head = head[len(bom):]
            break
    return head.lstrip(b" \t\r\n\x0c")


def detect_content_type(head: bytes) -> str:
    """Infer a MIME type from the first bytes of a payload.

    Binary signatures come from ``filetype``; XML and SVG are recognized by
    their leading markup since they carry no magic number.
    """
    kind = filetype.guess(head) if head else None
    if kind is not None and kind.mime.startswith("image/"):
        return kind.mime

    text = _strip_leading(head).lower()
    if text.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    if text.startswith(b"<svg"):
        return "image/svg+xml"

    if kind is not None:
        return kind.mime
    if head and not any(b in _BINARY_BYTES for b in head):
        return "text/plain; charset=utf-8"
    return "application/octet-stream"


def is_allowed_upload_type(mime: Optional[str]) -> bool:
    return bool(mime) and mime.startswith(ALLOWED_PREFIXES)


def copy_stream_capped(
    src: BinaryIO,
    dest_path: str,
    *,
    max_bytes: int = 0,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Copy ``src`` into ``dest_path`` and return the byte count.

    Returns -1 as soon as more than ``max_bytes`` were read (0 disables the
    cap); the partially written file is left for the caller to remove.
    """
    if max_bytes <= 0:
        with open(dest_path, "wb") as out:
            shutil.copyfileobj(src, out, chunk_size)
            return out.tell()

    size = 0
    with open(dest_path, "wb") as out:
        while True:
            chunk = src.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > max_bytes:
                return -1
            out.write(chunk)
    return size


def safe_unlink(path: str) -> None:
    """Best-effort file removal (no exception if it fails)."""
    try:
        os.remove(path)
    except OSError:
        pass
