"""Tests for config loading."""

from pathlib import Path

import pytest
from taskboard.config import ScoreboardConfig, SheetConfig, load_config
from taskboard.core.parser import SnapshotFormat

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "scoreboard.yaml.example"


class TestLoadConfig:
    def test_example_config_loads(self):
        config = load_config(EXAMPLE_CONFIG)
        assert config.name == "test-board"
        assert config.format is SnapshotFormat.NAME_TASKS
        assert config.placeholder_count == 5
        assert config.polling.interval_s == 30
        assert config.layout.spacing == 275
        assert config.sheet.api_key is None
        assert config.sheet.api_key_env == "GOOGLE_SHEETS_API_KEY"

    def test_minimal_config_defaults(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("scoreboard:\n  name: tiny\n")
        config = load_config(path)
        assert config.name == "tiny"
        assert config.prune_missing is False
        assert config.animation.duration_ms == 2000
        assert config.server.port == 3000
        assert config.state_file == Path("output/state.json")

    def test_total_column_format(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text(
            "scoreboard:\n  name: t\n  format: name_total_tasks\n"
            "layout:\n  compact_spacing: 200\n"
        )
        config = load_config(path)
        assert config.format is SnapshotFormat.NAME_TOTAL_TASKS
        assert config.layout.compact_spacing == 200

    def test_unknown_format_rejected(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("scoreboard:\n  name: t\n  format: csv\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_name(self, tmp_path):
        path = tmp_path / "board.yaml"
        path.write_text("scoreboard: {}\n")
        with pytest.raises(KeyError):
            load_config(path)


class TestSheetConfigResolution:
    def test_literal_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("SHEET_NAME", "from-env")
        resolved = SheetConfig(sheet_name="literal").resolved()
        assert resolved.sheet_name == "literal"

    def test_custom_env_names(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "k")
        resolved = SheetConfig(api_key_env="MY_KEY").resolved()
        assert resolved.api_key == "k"

    def test_defaults(self):
        config = ScoreboardConfig(name="x")
        assert config.sheet.timeout_s == 15.0
        assert config.layout.single_row_max == 5
