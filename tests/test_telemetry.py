"""Tests for RefreshLogger — JSONL cycle logging."""

import json

import pytest
from taskboard.core.telemetry import CycleEntry, RefreshLogger


@pytest.fixture
def logger(tmp_path):
    return RefreshLogger(output_dir=tmp_path, session_id="test-session-001")


class TestRefreshLogger:
    def test_log_cycle_creates_file(self, logger, tmp_path):
        logger.log_cycle(_make_entry(cycle=1))
        assert (tmp_path / "test-session-001.jsonl").exists()

    def test_log_cycle_writes_valid_jsonl(self, logger):
        logger.log_cycle(_make_entry(cycle=1))
        logger.log_cycle(_make_entry(cycle=2))
        lines = logger.file_path.read_text().strip().split("\n")
        assert len(lines) == 2
        for line in lines:
            parsed = json.loads(line)
            assert "cycle" in parsed
            assert "schema_version" in parsed

    def test_contains_all_fields(self, logger):
        logger.log_cycle(_make_entry(cycle=1))
        parsed = json.loads(logger.file_path.read_text().strip())
        for field in [
            "schema_version", "session_id", "cycle", "status", "changed",
            "completed_tasks", "standings", "error", "timestamp", "engine_version",
        ]:
            assert field in parsed, f"Missing field: {field}"

    def test_session_id_in_every_line(self, logger):
        logger.log_cycle(_make_entry(cycle=1))
        logger.log_cycle(_make_entry(cycle=2, status="transport_failure", error="timeout"))
        for line in logger.file_path.read_text().strip().split("\n"):
            assert json.loads(line)["session_id"] == "test-session-001"


def _make_entry(cycle: int = 1, status: str = "updated", error: str | None = None) -> CycleEntry:
    return CycleEntry(
        cycle=cycle,
        status=status,
        changed=status == "updated",
        completed_tasks=["Cake"],
        standings=[("Bob", 5.0), ("Alice", 3.0)],
        error=error,
        fetch_ms=12.3,
    )
