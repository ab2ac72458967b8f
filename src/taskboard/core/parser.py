"""Turn a raw sheet grid into typed contestant rows.

Row 0 holds headers. Column 0 is the contestant name; the
NAME_TOTAL_TASKS format also carries a sheet-computed total in column 1,
which is ignored since totals are always recomputed here.

Never raises on bad cell content: unparseable scores become 0, blank
names skip the row, and a too-short header yields an empty snapshot.
"""

import math
import re
from enum import Enum

from taskboard.core.models import ParsedSnapshot, SnapshotRow, TaskColumn

# Leading numeric prefix, so "7 pts" reads as 7 the way sheet users expect
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class SnapshotFormat(Enum):
    NAME_TASKS = "name_tasks"
    NAME_TOTAL_TASKS = "name_total_tasks"

    @property
    def first_task_column(self) -> int:
        return 2 if self is SnapshotFormat.NAME_TOTAL_TASKS else 1

    @property
    def min_header_columns(self) -> int:
        return self.first_task_column


def _cell(row: list, index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def parse_score(text: str) -> float:
    """Parse a score cell. Anything without a finite numeric prefix is 0."""
    match = _NUMBER_PREFIX_RE.match(text.strip())
    if not match:
        return 0.0
    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    # "1e999" overflows to inf; opposite infinities would sum to NaN
    return value if math.isfinite(value) else 0.0


def parse_snapshot(
    grid: list[list[str]],
    fmt: SnapshotFormat = SnapshotFormat.NAME_TASKS,
) -> ParsedSnapshot:
    if not grid or len(grid[0]) < fmt.min_header_columns:
        return ParsedSnapshot()

    headers = grid[0]
    task_columns = [
        TaskColumn(label=_cell(headers, i), index=i)
        for i in range(fmt.first_task_column, len(headers))
        if _cell(headers, i)
    ]

    rows = []
    for raw in grid[1:]:
        name = _cell(raw, 0)
        if not name:
            continue
        scores = {}
        for column in task_columns:
            text = _cell(raw, column.index)
            if text:
                scores[column.label] = parse_score(text)
        rows.append(SnapshotRow(name=name, task_scores=scores))

    return ParsedSnapshot(task_columns=task_columns, rows=rows)
