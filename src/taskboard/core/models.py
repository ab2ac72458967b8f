"""Scoreboard data model.

Plain validated records shared by every pipeline stage. Contestant is
pure data: rendering handles live in the presenter, keyed by name.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def _check_score(label: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"score for {label!r} must be a number, got {value!r}")
    if math.isnan(value):
        raise ValueError(f"score for {label!r} is NaN")
    return float(value)


@dataclass(frozen=True)
class TaskColumn:
    """A task header and its column index in the snapshot grid."""

    label: str
    index: int

    def __post_init__(self):
        if not self.label.strip():
            raise ValueError("task label must not be blank")
        if self.index < 0:
            raise ValueError(f"column index must be >= 0, got {self.index}")


@dataclass(frozen=True)
class SnapshotRow:
    """One contestant's scores as read from a snapshot.

    A label missing from task_scores means "not yet scored", which is
    not the same thing as a recorded zero.
    """

    name: str
    task_scores: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("contestant name must not be blank")
        for label, value in self.task_scores.items():
            _check_score(label, value)


@dataclass(frozen=True)
class ParsedSnapshot:
    """Task columns in sheet order plus contestant rows in row order."""

    task_columns: list[TaskColumn] = field(default_factory=list)
    rows: list[SnapshotRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def task_labels(self) -> list[str]:
        return [c.label for c in self.task_columns]


@dataclass
class Contestant:
    """A roster entry persisted across refresh cycles. Identity is name."""

    name: str
    current_total: float = 0.0
    previous_total: float = 0.0  # last total the display caught up to
    task_scores: dict[str, float] = field(default_factory=dict)
    placeholder: bool = False
    is_top: bool = False

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("contestant name must not be blank")
        self.current_total = _check_score("current_total", self.current_total)
        self.previous_total = _check_score("previous_total", self.previous_total)
        self.task_scores = {
            label: _check_score(label, value)
            for label, value in self.task_scores.items()
        }

    @property
    def in_motion(self) -> bool:
        return self.current_total != self.previous_total

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "current_total": self.current_total,
            "previous_total": self.previous_total,
            "task_scores": dict(self.task_scores),
            "placeholder": self.placeholder,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Contestant:
        return cls(
            name=data["name"],
            current_total=data.get("current_total", 0.0),
            previous_total=data.get("previous_total", 0.0),
            task_scores=data.get("task_scores", {}),
            placeholder=data.get("placeholder", False),
        )
