"""Roster ranking for display."""

from taskboard.core.models import Contestant


def rank_roster(roster: list[Contestant]) -> tuple[list[Contestant], int | None]:
    """Sort by current total, highest first, and flag the leader.

    Python's sort is stable, so equal totals keep their merge order.
    Returns the ordered roster and the top index (None when empty).
    """
    ordered = sorted(roster, key=lambda con: con.current_total, reverse=True)
    for i, con in enumerate(ordered):
        con.is_top = i == 0
    return ordered, (0 if ordered else None)
