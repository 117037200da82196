"""Millisecond wall-clock helpers used by the dining simulation."""

from __future__ import annotations

import time

__all__ = ["timestamp_ms", "smart_sleep"]

_POLL_INTERVAL_S = 0.0005


def timestamp_ms() -> int:
    """Return the current wall-clock time in whole milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def smart_sleep(duration_ms: int) -> None:
    """Block for at least ``duration_ms`` milliseconds.

    The wait is made of short naps so the wake-up lands close to the target
    instead of overshooting by a whole scheduler slice.
    """
    start = timestamp_ms()
    while timestamp_ms() - start < duration_ms:
        time.sleep(_POLL_INTERVAL_S)