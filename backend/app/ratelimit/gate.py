from __future__ import annotations
from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from threading import Lock
import time

from ..exceptions import UploadRateLimitedError


class UploadGate:
    """Process-wide cooldown between accepted uploads.

    One timestamp, one lock. ``admit()`` holds the lock for the whole
    check-and-persist step, so concurrent uploads serialize through it and at
    most one is accepted per window.
    """

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.interval = max(0.0, float(interval))
        self._clock = clock
        self._last: Optional[float] = None
        self._lock = Lock()

    def _remaining_locked(self) -> float:
        if self._last is None or self.interval <= 0:
            return 0.0
        return max(0.0, self.interval - (self._clock() - self._last))

    @contextmanager
    def admit(self) -> Iterator["UploadGate"]:
        """Enter the gate or raise UploadRateLimitedError.

        The accepted-upload time is recorded only when the block exits cleanly.
        """
        with self._lock:
            remaining = self._remaining_locked()
            if remaining > 0:
                raise UploadRateLimitedError(
                    f"Only one upload every {self.interval:g} seconds is allowed",
                    retry_after=remaining,
                )
            yield self
            self._last = self._clock()

    def remaining(self) -> float:
        with self._lock:
            return self._remaining_locked()

    def reset(self) -> None:
        with self._lock:
            self._last = None
