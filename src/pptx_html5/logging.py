from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .errors import OutputWriteError


@dataclass(slots=True)
class StageTimings:
    read_ms: float = 0.0
    parse_ms: float = 0.0
    render_ms: float = 0.0
    write_ms: float = 0.0


@dataclass(slots=True)
class RunLogEntry:
    run_id: str
    source: str
    status: str
    output_directory: str
    slides: int
    media_files: int
    warnings: list[str]
    error_code: str | None
    error_message: str | None
    timings: StageTimings
    size_bytes: int

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["timings"] = asdict(self.timings)
        return payload


class RunLogger:
    """Appends one JSON line per conversion; a logger without a path is a no-op."""

    _lock = threading.Lock()

    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file

    @property
    def enabled(self) -> bool:
        return self._log_file is not None

    def append(self, entry: RunLogEntry) -> None:
        if self._log_file is None:
            return
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        try:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._lock, self._log_file.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            raise OutputWriteError(f"Cannot append to run log {self._log_file}: {exc}") from exc


__all__ = ["RunLogEntry", "RunLogger", "StageTimings"]
