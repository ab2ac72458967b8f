"""Synchronous half of a refresh cycle.

parse -> resolve completion -> reconcile -> rank -> layout, applied to
a ScoreboardState. Nothing here suspends or raises on bad sheet input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from taskboard.core.layout import Layout, LayoutSettings, derive_layout
from taskboard.core.models import Contestant
from taskboard.core.parser import SnapshotFormat, parse_snapshot
from taskboard.core.ranking import rank_roster
from taskboard.core.reconciler import reconcile
from taskboard.core.scoring import resolve_completed_tasks
from taskboard.core.state import ScoreboardState


class CycleStatus(Enum):
    BUSY = "busy"
    TRANSPORT_FAILURE = "transport_failure"
    EMPTY = "empty"
    UNCHANGED = "unchanged"
    UPDATED = "updated"


@dataclass
class CycleResult:
    """What one refresh cycle hands to the presenter."""

    status: CycleStatus
    roster: list[Contestant] = field(default_factory=list)
    changed: bool = False
    top_index: int | None = None
    layout: Layout | None = None
    completed_tasks: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    error: str | None = None


def arrange(state: ScoreboardState, settings: LayoutSettings | None = None) -> CycleResult:
    """Rank the current roster in place and lay it out, without new data."""
    state.roster, top = rank_roster(state.roster)
    return CycleResult(
        status=CycleStatus.UNCHANGED,
        roster=list(state.roster),
        top_index=top,
        layout=derive_layout(len(state.roster), settings),
        completed_tasks=list(state.completed_tasks),
    )


def run_pipeline(
    state: ScoreboardState,
    grid: list[list[str]],
    fmt: SnapshotFormat = SnapshotFormat.NAME_TASKS,
    settings: LayoutSettings | None = None,
    prune_missing: bool = False,
) -> CycleResult:
    """Apply one snapshot grid to state and return the display bundle.

    An empty snapshot (no header, short header, or no named rows)
    leaves state untouched and reports EMPTY.
    """
    snapshot = parse_snapshot(grid, fmt)
    if snapshot.is_empty:
        result = arrange(state, settings)
        result.status = CycleStatus.EMPTY
        return result

    completed = resolve_completed_tasks(snapshot)
    merged = reconcile(
        state.roster,
        snapshot.rows,
        completed,
        previous_completed=state.completed_tasks,
        prune_missing=prune_missing,
    )

    state.roster = merged.roster
    state.task_columns = snapshot.task_labels
    state.completed_tasks = completed
    state.last_fetch_time = datetime.now(timezone.utc).isoformat()

    result = arrange(state, settings)
    result.status = CycleStatus.UPDATED if merged.changed else CycleStatus.UNCHANGED
    result.changed = merged.changed
    result.added = merged.added
    result.removed = merged.removed
    return result
