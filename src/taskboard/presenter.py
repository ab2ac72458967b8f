"""Display layer for the scoreboard.

The orchestrator hands each cycle's result to a Presenter and waits for
present() to return before releasing the refresh gate, so present()
must not return until its animation is over.
"""

from __future__ import annotations

import asyncio
import math
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from taskboard.config import AnimationConfig
from taskboard.core.pipeline import CycleResult

BLANK_PORTRAIT = "images/blank.jpg"

_NOTICE_STYLES = {
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
}


@dataclass(frozen=True)
class Notice:
    message: str
    level: str = "info"  # info | warning | error


def portrait_path(name: str | None) -> str:
    """Portrait file for a name: "John Doe" -> images/portraits/johndoe.png."""
    if not name:
        return BLANK_PORTRAIT
    simple = re.sub(r"[^a-z0-9]", "", name.lower())
    return f"images/portraits/{simple}.png"


def ease(t: float, a: float, b: float) -> float:
    """In-out quadratic interpolation from a to b, t in [0, 1]."""
    eased = 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t
    return (b - a) * eased + a


def tally_value(old: float, new: float, t: float) -> float:
    """Score shown at progress t of a tally from old to new.

    Whole part eases between the floors; the fractional part of the old
    score shows for the first half and of the new score after.
    """
    whole = math.floor(ease(min(t, 1.0), math.floor(old), math.floor(new)) + 0.5)
    remainder = old - math.floor(old) if t < 0.5 else new - math.floor(new)
    return whole + remainder


def format_score(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


class Presenter(ABC):
    """Abstract base for scoreboard displays."""

    @abstractmethod
    def loading(self, active: bool) -> None:
        """Fetch started (True) or finished (False)."""

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        """Show a one-shot message."""

    @abstractmethod
    async def present(self, result: CycleResult) -> None:
        """Show a cycle's result; return once its animation has finished."""


@dataclass
class NullPresenter(Presenter):
    """Records calls instead of drawing. For headless runs and tests."""

    notices: list[Notice] = field(default_factory=list)
    presented: list[CycleResult] = field(default_factory=list)
    loading_events: list[bool] = field(default_factory=list)
    hold: asyncio.Event | None = None  # when set, present() waits on it

    def loading(self, active: bool) -> None:
        self.loading_events.append(active)

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    async def present(self, result: CycleResult) -> None:
        self.presented.append(result)
        if self.hold is not None:
            await self.hold.wait()


class RichPresenter(Presenter):
    """Terminal scoreboard rendered with rich, with animated tallies."""

    def __init__(self, title: str, animation: AnimationConfig | None = None,
                 console: Console | None = None):
        self._title = title
        self._animation = animation or AnimationConfig()
        self._console = console or Console()
        self._portraits: dict[str, str] = {}  # display handles, keyed by name
        self._fetching = False

    def _portrait(self, name: str) -> str:
        if name not in self._portraits:
            self._portraits[name] = portrait_path(name)
        return self._portraits[name]

    def loading(self, active: bool) -> None:
        self._fetching = active

    def notify(self, notice: Notice) -> None:
        style = _NOTICE_STYLES.get(notice.level, "")
        self._console.print(Text(notice.message, style=style))

    def render(self, result: CycleResult, progress: float | None = None) -> Panel:
        """Build the board. progress=None shows previous totals."""
        table = Table(expand=True)
        table.add_column("#", justify="right", width=3)
        table.add_column("Contestant")
        table.add_column("Portrait", style="dim")
        table.add_column("Score", justify="right")
        last_task = result.completed_tasks[-1] if result.completed_tasks else None
        if last_task:
            table.add_column(last_task, justify="right")
        table.add_column("Slot", justify="center", style="dim")

        for i, con in enumerate(result.roster):
            if progress is None:
                shown = con.previous_total
            else:
                shown = tally_value(con.previous_total, con.current_total, progress)
            name = Text(con.name, style="bold yellow" if con.is_top else "")
            if con.is_top:
                name.append(" ★")
            cells = [str(i + 1), name, self._portrait(con.name), format_score(shown)]
            if last_task:
                cells.append(format_score(con.task_scores.get(last_task, 0)))
            if result.layout is not None:
                slot = result.layout.slots[i]
                cells.append(f"{slot.row}:{slot.column}")
            else:
                cells.append("")
            table.add_row(*cells)

        subtitle = "fetching…" if self._fetching else None
        return Panel(Group(table), title=self._title, subtitle=subtitle)

    async def present(self, result: CycleResult) -> None:
        delay_s = self._animation.delay_ms / 1000
        duration_s = self._animation.duration_ms / 1000
        frame_s = max(self._animation.frame_ms, 1) / 1000

        with Live(self.render(result), console=self._console, auto_refresh=False) as live:
            await asyncio.sleep(delay_s)
            start = time.monotonic()
            while True:
                elapsed = time.monotonic() - start
                progress = 1.0 if duration_s <= 0 else min(elapsed / duration_s, 1.0)
                live.update(self.render(result, progress), refresh=True)
                if progress >= 1.0:
                    break
                await asyncio.sleep(frame_s)
