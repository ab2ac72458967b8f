"""Tests for presenters and tally animation helpers."""

import asyncio
import io

from rich.console import Console

from taskboard.config import AnimationConfig
from taskboard.core.pipeline import run_pipeline
from taskboard.core.state import ScoreboardState
from taskboard.presenter import (
    BLANK_PORTRAIT,
    Notice,
    RichPresenter,
    ease,
    format_score,
    portrait_path,
    tally_value,
)


class TestPortraitPath:
    def test_simplified_name(self):
        assert portrait_path("John Doe") == "images/portraits/johndoe.png"

    def test_punctuation_dropped(self):
        assert portrait_path("Mel O'Neil-2") == "images/portraits/meloneil2.png"

    def test_blank(self):
        assert portrait_path("") == BLANK_PORTRAIT
        assert portrait_path(None) == BLANK_PORTRAIT


class TestEase:
    def test_endpoints(self):
        assert ease(0, 10, 20) == 10
        assert ease(1, 10, 20) == 20

    def test_midpoint(self):
        assert ease(0.5, 0, 10) == 5

    def test_slow_start(self):
        assert ease(0.25, 0, 100) == 12.5


class TestTallyValue:
    def test_start_and_end(self):
        assert tally_value(3, 11, 0) == 3
        assert tally_value(3, 11, 1) == 11

    def test_old_remainder_first_half(self):
        assert tally_value(2.5, 6, 0.1) % 1 == 0.5

    def test_new_remainder_second_half(self):
        assert tally_value(2, 6.25, 0.9) % 1 == 0.25

    def test_clamped(self):
        assert tally_value(0, 4, 5) == 4


class TestFormatScore:
    def test_whole(self):
        assert format_score(7.0) == "7"

    def test_fraction(self):
        assert format_score(2.5) == "2.5"


def _result():
    state = ScoreboardState()
    return run_pipeline(state, [["Name", "Cake"], ["Alice", "3"], ["Bob", "5"]])


class TestRichPresenter:
    def _presenter(self):
        console = Console(file=io.StringIO(), width=100, force_terminal=False)
        animation = AnimationConfig(delay_ms=0, duration_ms=0, frame_ms=1)
        return RichPresenter("Test Board", animation, console=console), console

    def test_render_shows_leader_and_task(self):
        presenter, console = self._presenter()
        console.print(presenter.render(_result(), progress=1.0))
        out = console.file.getvalue()
        assert "Test Board" in out
        assert "Bob ★" in out
        assert "Cake" in out
        assert "images/portraits/alice.png" in out

    def test_present_completes(self):
        presenter, console = self._presenter()
        asyncio.run(presenter.present(_result()))
        assert "Alice" in console.file.getvalue()

    def test_notify(self):
        presenter, console = self._presenter()
        presenter.notify(Notice("No new scores detected."))
        assert "No new scores detected." in console.file.getvalue()
