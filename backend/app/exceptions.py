"""Backend-only exception types.

These are used to keep service code HTTP-agnostic while still allowing the
global exception handlers in ``main.py`` to map errors to HTTP responses.
"""

from __future__ import annotations


class InvalidUploadError(Exception):
    """Raised when an upload request is malformed or carries a disallowed type."""


class UploadConflictError(Exception):
    """Raised when the target filename already exists and overwrite was not forced."""


class UploadTooLargeError(Exception):
    """Raised when an upload exceeds the configured size cap."""


class UploadRateLimitedError(Exception):
    """Raised when an upload arrives inside the cooldown window."""

    def __init__(self, message: str, retry_after: float) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class UploadStorageError(Exception):
    """Raised for unexpected filesystem failures while persisting an upload."""


class TemplateRenderError(Exception):
    """Raised when an HTML template cannot be loaded or rendered."""
