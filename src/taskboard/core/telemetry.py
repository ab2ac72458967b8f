"""RefreshLogger — JSONL log of refresh cycles.

One logger per session. Writes one line per cycle; every entry carries
the schema version and session ID.
"""

import json
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from pathlib import Path

import taskboard

_SCHEMA_VERSION = "1.0.0"


@dataclass
class CycleEntry:
    """One refresh cycle."""

    cycle: int
    status: str
    changed: bool
    completed_tasks: list[str] = field(default_factory=list)
    standings: list[tuple[str, float]] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    error: str | None = None
    fetch_ms: float = 0.0


class RefreshLogger:
    """Writes JSONL telemetry for a scoreboard session."""

    def __init__(self, output_dir: Path, session_id: str):
        self._output_dir = Path(output_dir)
        self._session_id = session_id
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._output_dir / f"{session_id}.jsonl"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def log_cycle(self, entry: CycleEntry) -> None:
        record = asdict(entry)
        record["schema_version"] = _SCHEMA_VERSION
        record["session_id"] = self._session_id
        record["engine_version"] = taskboard.__version__
        record["timestamp"] = datetime.now(timezone.utc).isoformat()
        with open(self._file_path, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
