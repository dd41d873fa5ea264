"""I/O adapter package.

This package contains backend boundary code for:
  - reading service configuration from the environment
  - resolving user-requested upload paths safely

Keep this package free of request handling; it should remain an interface layer.
"""

from .environment import ServiceConfig, load_service_config
from .errors import UnsafePathError, UploadNotFoundError
from .path_resolver import resolve_upload_path

__all__ = [
    "ServiceConfig",
    "load_service_config",
    "UnsafePathError",
    "UploadNotFoundError",
    "resolve_upload_path",
]
