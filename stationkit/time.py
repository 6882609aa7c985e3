"""Named stopwatches and timestamp formatting."""

from __future__ import annotations

import time as _time
from datetime import datetime, timedelta, timezone


class Stopwatch:
    """A set of named timers, each started the first time it is read."""

    def __init__(self):
        self._starts: dict[str, int] = {}

    def _elapsed_ns(self, instant_id: str) -> int:
        now = _time.perf_counter_ns()
        start = self._starts.setdefault(instant_id, now)
        return now - start

    def microseconds(self, instant_id: str) -> int:
        """Microseconds since the named timer started."""
        return self._elapsed_ns(instant_id) // 1_000

    def milliseconds(self, instant_id: str) -> int:
        """Milliseconds since the named timer started."""
        return self._elapsed_ns(instant_id) // 1_000_000

    def reset(self, instant_id: str) -> None:
        """Restart the named timer."""
        self._starts[instant_id] = _time.perf_counter_ns()


def unix_timestamp() -> str:
    """Seconds since the Unix epoch with six decimals."""
    return f"{_time.time():.6f}"


def format_timestamp(fmt: str, offset: str = "") -> str:
    """Format the current time; an empty offset means local time, else whole hours east of UTC."""
    if not offset:
        return datetime.now().astimezone().strftime(fmt)
    try:
        hours = int(offset)
    except ValueError:
        raise ValueError(f"invalid offset: {offset!r}") from None
    seconds = hours * 3600
    if not -86400 < seconds < 86400:
        raise ValueError(f"offset out of range: {offset!r}")
    tz = timezone(timedelta(seconds=seconds))
    return datetime.now(timezone.utc).astimezone(tz).strftime(fmt)