"""StateStore — JSON persistence of ScoreboardState.

Best effort: the last successful write wins. An unreadable file is
reported and treated as no saved state.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from taskboard.core.state import ScoreboardState

logger = logging.getLogger(__name__)

_SCHEMA_VERSION = "1.0.0"


class StateStore:
    def __init__(self, path: Path, placeholder_count: int = 5):
        self._path = Path(path)
        self._placeholder_count = placeholder_count

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ScoreboardState | None:
        """Return the saved state, or None when there is nothing usable."""
        if not self._path.exists():
            return None
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return None
        if not isinstance(data, dict) or not data:
            return None
        try:
            return ScoreboardState.from_dict(data, self._placeholder_count)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring invalid state file %s: %s", self._path, exc)
            return None

    def read_raw(self) -> dict:
        """Saved state as a plain dict, empty if none. Used by the server."""
        try:
            with open(self._path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            return {}

    def save(self, state: ScoreboardState) -> None:
        """Write state atomically (tmp + rename)."""
        record = state.to_dict()
        record["schema_version"] = _SCHEMA_VERSION
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(record, f, indent=2)
            os.replace(tmp_path, self._path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
