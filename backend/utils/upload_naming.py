from __future__ import annotations

import datetime as _dt
import os
from typing import Optional


TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def _now() -> _dt.datetime:
    return _dt.datetime.now()


def clean_original_name(name: Optional[str]) -> str:
    """Reduce a client-supplied filename to a bare basename.

    Both "/" and "\\" count as separators so Windows browsers that send full
    paths end up with just the file's own name.
    """
    base = (name or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    if base in ("", ".", ".."):
        raise ValueError(f"Unusable filename: {name!r}")
    return base


def timestamp_token(now: Optional[_dt.datetime] = None) -> str:
    return (now or _now()).strftime(TIMESTAMP_FORMAT)


def derive_filename(
    original_name: Optional[str],
    *,
    strategy: str = "timestamp",
    force_name: bool = False,
    now: Optional[_dt.datetime] = None,
) -> str:
    """Pick the on-disk name for an upload.

    Strategies:
      - timestamp          -> "<YYYYMMDD-HHMMSS><ext>"
      - timestamp_original -> "<YYYYMMDD-HHMMSS>_<original name>"
      - original           -> "<original name>"

    ``force_name`` keeps the original name regardless of strategy.
    """
    orig = clean_original_name(original_name)

    if force_name or strategy == "original":
        return orig

    ts = timestamp_token(now)
    if strategy == "timestamp_original":
        return f"{ts}_{orig}"
    if strategy == "timestamp":
        _, ext = os.path.splitext(orig)
        return f"{ts}{ext}"

    raise ValueError(f"Unknown naming strategy: {strategy!r}")
