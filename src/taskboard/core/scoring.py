"""Task completion and score aggregation.

A task counts toward totals only once every contestant in the current
snapshot has a recorded value for it. Completion is recomputed from
each snapshot and is not sticky: a task can drop back to incomplete.
"""

from taskboard.core.models import ParsedSnapshot


def resolve_completed_tasks(snapshot: ParsedSnapshot) -> list[str]:
    """Return labels of complete tasks, in column order.

    With no contestant rows every task is vacuously complete.
    """
    return [
        label
        for label in snapshot.task_labels
        if all(label in row.task_scores for row in snapshot.rows)
    ]


def aggregate_score(task_scores: dict[str, float], completed: list[str]) -> float:
    """Sum task_scores over completed tasks; missing entries count as 0."""
    total = 0.0
    for label in completed:
        total += task_scores.get(label, 0.0)
    return total
