"""State that survives between refresh cycles."""

from __future__ import annotations

from dataclasses import dataclass, field

from taskboard.core.models import Contestant


def placeholder_roster(count: int) -> list[Contestant]:
    return [
        Contestant(name=f"Contestant {i + 1}", placeholder=True)
        for i in range(count)
    ]


@dataclass
class ScoreboardState:
    roster: list[Contestant] = field(default_factory=list)
    task_columns: list[str] = field(default_factory=list)
    completed_tasks: list[str] = field(default_factory=list)
    last_fetch_time: str | None = None  # ISO-8601 UTC of last parsed snapshot

    @classmethod
    def default(cls, placeholder_count: int = 5) -> ScoreboardState:
        return cls(roster=placeholder_roster(placeholder_count))

    def settle(self) -> None:
        """Mark the display as caught up with current totals."""
        for con in self.roster:
            con.previous_total = con.current_total

    def to_dict(self) -> dict:
        return {
            "contestants": [con.to_dict() for con in self.roster],
            "task_columns": list(self.task_columns),
            "completed_tasks": list(self.completed_tasks),
            "last_fetch_time": self.last_fetch_time,
        }

    @classmethod
    def from_dict(cls, data: dict, placeholder_count: int = 5) -> ScoreboardState:
        """Rehydrate. A payload without contestants gets placeholders."""
        contestants = data.get("contestants") or []
        roster = [Contestant.from_dict(c) for c in contestants]
        if not roster:
            roster = placeholder_roster(placeholder_count)
        return cls(
            roster=roster,
            task_columns=list(data.get("task_columns", [])),
            completed_tasks=list(data.get("completed_tasks", [])),
            last_fetch_time=data.get("last_fetch_time"),
        )
