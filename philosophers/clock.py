"""Wall-clock helpers working in whole milliseconds."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def sleep_ms(milliseconds: float) -> None:
    """Sleep for the given number of milliseconds; non-positive values return at once."""
    if milliseconds > 0:
        time.sleep(milliseconds / 1000)