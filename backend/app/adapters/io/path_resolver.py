"""Path normalization and containment checks for user-requested uploads."""

from __future__ import annotations

import os

from backend.utils.upload_sniffing import TMP_PREFIX

from .errors import UnsafePathError, UploadNotFoundError


def _is_within(path: str, root: str) -> bool:
    return path.startswith(root.rstrip(os.sep) + os.sep)


def resolve_upload_path(upload_dir: str, requested: str) -> str:
    """Resolve a request path to a stored file inside ``upload_dir``.

    Rules:
      - A request ending in "/" asks for a directory listing and is refused.
      - The name is joined onto the absolute upload directory and normalized;
        anything that does not land strictly inside it is refused. This covers
        "../" sequences, absolute paths and Windows-style separators.
      - In-flight temp files are never served.
      - A contained path must exist as a regular file.

    Raises:
        UnsafePathError: directory request or traversal attempt.
        UploadNotFoundError: contained path that is not an existing file.
    """
    root = os.path.abspath(upload_dir)
    p = (requested or "").replace("\\", "/")

    if not p or p.endswith("/"):
        raise UnsafePathError(f"Directory access refused (got: {requested!r})")

    ap = os.path.abspath(os.path.join(root, p))
    if not _is_within(ap, root):
        raise UnsafePathError(f"Path must be under {root} (got: {requested!r}, resolved to: {ap})")

    if os.path.basename(ap).startswith(TMP_PREFIX) or not os.path.isfile(ap):
        raise UploadNotFoundError(f"File not found: {requested} (resolved to: {ap})")

    return ap
