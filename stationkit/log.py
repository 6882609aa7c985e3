"""Appending log writer with timestamped lines."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO


class LogWriter:
    """Keeps log files open for appending between writes."""

    def __init__(self):
        self._files: dict[Path, TextIO] = {}

    def _open(self, path: Path) -> TextIO:
        handle = self._files.get(path)
        if handle is None:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open("a", encoding="utf-8", newline="")
            self._files[path] = handle
        return handle

    def write(self, path, data: str, timestamp: bool = True) -> None:
        """Append data; with timestamp, the first line is stamped and others get a dash."""
        handle = self._open(Path(path))
        if not timestamp:
            handle.write(data)
        else:
            now = datetime.now(timezone.utc)
            stamp = now.strftime("%Y-%m-%d %H:%M:%S.") + f"{now.microsecond // 1000:03d}"
            first, *rest = data.split("\n")
            handle.write(f"[{stamp}] {first}\n")
            for line in rest:
                handle.write(f" - {line}\n")
        handle.flush()

    def close_all(self) -> None:
        """Close every open log file."""
        for handle in self._files.values():
            handle.close()
        self._files.clear()


_default = LogWriter()


def log_write(path, data: str, timestamp: bool = True) -> None:
    """Write through the shared writer."""
    _default.write(path, data, timestamp)


def log_close_all() -> None:
    """Close the shared writer's files."""
    _default.close_all()