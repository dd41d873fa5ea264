from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from typing import BinaryIO, Optional

from backend.utils.upload_naming import derive_filename
from backend.utils.upload_sniffing import (
    TMP_PREFIX,
    copy_stream_capped,
    detect_content_type,
    is_allowed_upload_type,
    read_sniff_window,
    safe_unlink,
)

from ..adapters.io.environment import ServiceConfig
from ..exceptions import (
    InvalidUploadError,
    UploadConflictError,
    UploadStorageError,
    UploadTooLargeError,
)
from ..ratelimit.gate import UploadGate

logger = logging.getLogger(__name__)


@dataclass
class StoredUpload:
    filename: str
    path: str
    content_type: Optional[str]
    forced: bool = False


def store_upload(
    config: ServiceConfig,
    gate: UploadGate,
    stream: BinaryIO,
    original_name: Optional[str],
    *,
    force_upload: bool = False,
    force_name: bool = False,
) -> StoredUpload:
    """
    Run one upload through the gate and onto disk:
    rate-limit -> sniff -> name -> conflict check -> copy.

    The gate records the upload time only if this function returns normally.
    """
    with gate.admit():
        try:
            head = read_sniff_window(stream)
        except OSError as e:
            raise UploadStorageError(f"Could not read upload: {e}") from e

        if not head:
            raise InvalidUploadError("Empty upload")

        content_type: Optional[str] = None
        if not force_upload:
            content_type = detect_content_type(head)
            if not is_allowed_upload_type(content_type):
                raise InvalidUploadError(f"Only image uploads are allowed (detected: {content_type})")

        try:
            filename = derive_filename(original_name, strategy=config.naming, force_name=force_name)
        except ValueError as e:
            raise InvalidUploadError(str(e)) from e

        dest = os.path.join(config.upload_dir, filename)
        if os.path.exists(dest) and not force_upload:
            raise UploadConflictError(f"File already exists, overwrite not allowed: {filename}")

        # Temp file lives in upload_dir so os.replace() is atomic; dest is
        # untouched until the copy completes.
        tmp_path = os.path.join(config.upload_dir, f"{TMP_PREFIX}{uuid.uuid4().hex}")
        try:
            os.makedirs(config.upload_dir, exist_ok=True)
            written = copy_stream_capped(stream, tmp_path, max_bytes=config.max_upload_bytes)
            if written < 0:
                raise UploadTooLargeError(
                    f"Upload exceeds the {config.max_upload_bytes} byte limit"
                )
            os.replace(tmp_path, dest)
        except OSError as e:
            raise UploadStorageError(f"Could not write {filename}: {e}") from e
        finally:
            safe_unlink(tmp_path)

        logger.info("Stored upload %s (%d bytes, type=%s, forced=%s)", filename, written, content_type, force_upload)
        return StoredUpload(filename=filename, path=dest, content_type=content_type, forced=force_upload)
