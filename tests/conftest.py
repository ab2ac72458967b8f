"""Shared test fixtures for taskboard."""

import pytest

from taskboard.config import ScoreboardConfig, AnimationConfig, PollingConfig


@pytest.fixture
def tmp_output(tmp_path):
    """Provide a temporary output directory for test runs."""
    return tmp_path / "output"


@pytest.fixture
def board_config(tmp_output):
    """Config with no animation delay and files under tmp."""
    return ScoreboardConfig(
        name="test-board",
        state_file=tmp_output / "state.json",
        output_dir=tmp_output / "telemetry",
        animation=AnimationConfig(delay_ms=0, duration_ms=0, frame_ms=1),
        polling=PollingConfig(interval_s=0.01),
    )
