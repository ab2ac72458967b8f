"""Tests for ranking and layout derivation."""

from taskboard.core.layout import LayoutSettings, Slot, derive_layout
from taskboard.core.models import Contestant
from taskboard.core.ranking import rank_roster


def _roster(*pairs) -> list[Contestant]:
    return [Contestant(name=n, current_total=t) for n, t in pairs]


class TestRankRoster:
    def test_descending(self):
        ordered, top = rank_roster(_roster(("A", 1), ("B", 9), ("C", 5)))
        assert [c.name for c in ordered] == ["B", "C", "A"]
        assert top == 0

    def test_stable_ties(self):
        ordered, _ = rank_roster(_roster(("X", 10), ("Y", 10), ("Z", 10)))
        assert [c.name for c in ordered] == ["X", "Y", "Z"]

    def test_ties_keep_merge_order_not_alphabetical(self):
        ordered, _ = rank_roster(_roster(("Zed", 4), ("Amy", 4), ("Max", 7)))
        assert [c.name for c in ordered] == ["Max", "Zed", "Amy"]

    def test_top_flag(self):
        ordered, _ = rank_roster(_roster(("A", 1), ("B", 2)))
        assert [c.is_top for c in ordered] == [True, False]

    def test_top_flag_moves(self):
        roster = _roster(("A", 5), ("B", 2))
        rank_roster(roster)
        roster[1].current_total = 9
        ordered, _ = rank_roster(roster)
        assert ordered[0].name == "B" and ordered[0].is_top
        assert not ordered[1].is_top

    def test_empty(self):
        assert rank_roster([]) == ([], None)

    def test_single(self):
        ordered, top = rank_roster(_roster(("A", 0)))
        assert top == 0 and ordered[0].is_top


class TestDeriveLayout:
    def test_five_is_single_row(self):
        layout = derive_layout(5)
        assert layout.rows == 1
        assert layout.capacity == 5
        assert layout.spacing == 275
        assert layout.slots == [Slot(0, i) for i in range(5)]

    def test_six_is_two_rows_of_three(self):
        layout = derive_layout(6)
        assert layout.rows == 2
        assert layout.row_sizes() == [3, 3]
        assert layout.spacing == 220

    def test_seven_splits_four_three(self):
        layout = derive_layout(7)
        assert layout.capacity == 4
        assert layout.row_sizes() == [4, 3]
        assert layout.slots[4] == Slot(row=1, column=0)

    def test_empty(self):
        layout = derive_layout(0)
        assert layout.rows == 1
        assert layout.slots == []

    def test_offsets(self):
        layout = derive_layout(7)
        assert layout.offset(0) == (30, 0)
        assert layout.offset(3) == (30 + 3 * 220, 0)
        assert layout.offset(5) == (30 + 220, 420)

    def test_custom_settings(self):
        settings = LayoutSettings(single_row_max=3, spacing=100, compact_spacing=50)
        layout = derive_layout(4, settings)
        assert layout.rows == 2
        assert layout.spacing == 50
        assert layout.row_sizes() == [2, 2]
