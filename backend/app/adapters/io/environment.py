"""Environment-driven configuration for the upload service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

NamingStrategy = Literal["timestamp", "timestamp_original", "original"]
NAMING_STRATEGIES = ("timestamp", "timestamp_original", "original")

DEFAULT_UPLOAD_INTERVAL_SECONDS = 10.0
DEFAULT_MAX_UPLOAD_MB = 10


def _repo_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../.."))


def get_upload_dir() -> str:
    """Read-write uploads directory (Docker: usually /data/uploads; Dev: ./uploads)."""
    return os.path.abspath(os.getenv("UPLOAD_DIR", "./uploads"))


def get_static_dir() -> str:
    return os.path.abspath(os.getenv("STATIC_DIR", os.path.join(_repo_root(), "static")))


def get_templates_dir() -> str:
    return os.path.abspath(os.getenv("TEMPLATES_DIR", os.path.join(_repo_root(), "templates")))


def get_upload_interval() -> float:
    raw = os.getenv("UPLOAD_INTERVAL_SECONDS", "").strip()
    if not raw:
        return DEFAULT_UPLOAD_INTERVAL_SECONDS
    value = float(raw)
    if value < 0:
        raise ValueError(f"UPLOAD_INTERVAL_SECONDS must be >= 0 (got: {raw!r})")
    return value


def get_naming_strategy() -> NamingStrategy:
    raw = os.getenv("UPLOAD_NAMING", "timestamp").strip().lower()
    if raw not in NAMING_STRATEGIES:
        raise ValueError(
            f"UPLOAD_NAMING must be one of: {', '.join(NAMING_STRATEGIES)} (got: {raw!r})"
        )
    return raw  # type: ignore[return-value]


def get_max_upload_bytes() -> int:
    raw = os.getenv("MAX_UPLOAD_MB", "").strip()
    mb = int(raw) if raw else DEFAULT_MAX_UPLOAD_MB
    if mb < 0:
        raise ValueError(f"MAX_UPLOAD_MB must be >= 0 (got: {raw!r})")
    return mb * 1024 * 1024


@dataclass(frozen=True)
class ServiceConfig:
    upload_dir: str
    static_dir: str
    templates_dir: str
    upload_interval: float = DEFAULT_UPLOAD_INTERVAL_SECONDS
    naming: NamingStrategy = "timestamp"
    # 0 disables the size cap
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024


def load_service_config() -> ServiceConfig:
    """Build a ServiceConfig from the process environment."""
    return ServiceConfig(
        upload_dir=get_upload_dir(),
        static_dir=get_static_dir(),
        templates_dir=get_templates_dir(),
        upload_interval=get_upload_interval(),
        naming=get_naming_strategy(),
        max_upload_bytes=get_max_upload_bytes(),
    )
