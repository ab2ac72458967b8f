"""Board layout: grid slots and spacing for a ranked roster.

Up to single_row_max contestants sit in one row at the wide spacing.
Past that the board splits into two rows of ceil(n/2) capacity at the
compact spacing, leaders filling row 0 left to right.
"""

import math
from dataclasses import dataclass, field


@dataclass
class LayoutSettings:
    single_row_max: int = 5
    spacing: int = 275          # horizontal step, single row
    compact_spacing: int = 220  # horizontal step, two rows
    row_offset: int = 420       # vertical step between rows
    margin: int = 30            # left edge offset


@dataclass(frozen=True)
class Slot:
    row: int
    column: int


@dataclass(frozen=True)
class Layout:
    rows: int
    capacity: int  # slots per row
    spacing: int
    row_offset: int
    margin: int
    slots: list[Slot] = field(default_factory=list)

    def offset(self, index: int) -> tuple[int, int]:
        """Pixel (x, y) for the contestant at a post-sort index."""
        slot = self.slots[index]
        return (
            self.margin + self.spacing * slot.column,
            self.row_offset * slot.row,
        )

    def row_sizes(self) -> list[int]:
        sizes = [0] * self.rows
        for slot in self.slots:
            sizes[slot.row] += 1
        return sizes


def derive_layout(count: int, settings: LayoutSettings | None = None) -> Layout:
    settings = settings or LayoutSettings()
    count = max(count, 0)

    if count <= settings.single_row_max:
        return Layout(
            rows=1,
            capacity=count,
            spacing=settings.spacing,
            row_offset=0,
            margin=settings.margin,
            slots=[Slot(row=0, column=i) for i in range(count)],
        )

    capacity = math.ceil(count / 2)
    slots = [
        Slot(row=0, column=i) if i < capacity else Slot(row=1, column=i - capacity)
        for i in range(count)
    ]
    return Layout(
        rows=2,
        capacity=capacity,
        spacing=settings.compact_spacing,
        row_offset=settings.row_offset,
        margin=settings.margin,
        slots=slots,
    )
