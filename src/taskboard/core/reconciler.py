"""Merge a parsed snapshot into the roster by contestant name.

Matching contestants get their task scores replaced and their total
recomputed; unknown names are appended, starting already caught up
(previous_total == current_total) so they do not animate in from zero.
previous_total of existing contestants is never written here: the
display advances it once an animation has finished.

Contestants missing from the snapshot are kept unless prune_missing is
set. Placeholder contestants are dropped as soon as real rows arrive.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from taskboard.core.models import Contestant, SnapshotRow
from taskboard.core.scoring import aggregate_score


@dataclass
class Reconciliation:
    roster: list[Contestant]
    changed: bool
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def reconcile(
    roster: list[Contestant],
    rows: list[SnapshotRow],
    completed: list[str],
    previous_completed: list[str] | None = None,
    prune_missing: bool = False,
) -> Reconciliation:
    """Merge rows into roster. Contestant objects are updated in place."""
    if not rows:
        return Reconciliation(roster=list(roster), changed=False)

    seen = {row.name for row in rows}
    kept: list[Contestant] = []
    removed: list[str] = []
    for con in roster:
        if con.placeholder or (prune_missing and con.name not in seen):
            removed.append(con.name)
        else:
            kept.append(con)

    by_name = {con.name: con for con in kept}
    added: list[str] = []
    updated: list[str] = []

    for row in rows:
        total = aggregate_score(row.task_scores, completed)
        con = by_name.get(row.name)
        if con is None:
            con = Contestant(
                name=row.name,
                current_total=total,
                previous_total=total,
                task_scores=dict(row.task_scores),
            )
            by_name[row.name] = con
            kept.append(con)
            added.append(row.name)
            continue

        con.task_scores = dict(row.task_scores)
        if con.current_total != total:
            con.current_total = total
            updated.append(row.name)

    changed = bool(added or updated or removed)
    # A newly completed task refreshes the board even when no total moved
    if len(completed) > len(previous_completed or []):
        changed = True

    return Reconciliation(
        roster=kept,
        changed=changed,
        added=added,
        updated=updated,
        removed=removed,
    )
