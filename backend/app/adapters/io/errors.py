"""Backend-local I/O adapter errors.

These errors represent boundary failures when serving stored uploads (unsafe
paths, missing files). They are mapped to HTTP responses by global exception
handlers in ``backend/app/main.py``.
"""


class UnsafePathError(Exception):
    """Raised when a requested path escapes the upload directory."""


class UploadNotFoundError(Exception):
    """Raised when a requested upload does not exist on disk."""
