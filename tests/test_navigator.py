"""
Tests for grid keyboard navigation.

Section sizes stand in for real sections; the navigator only needs counts.
"""

import pytest

from quickgrid.view.navigator import SEARCH, Direction, GridNavigator, NavigationState

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


@pytest.fixture
def nav():
    return GridNavigator(columns=8)


def at(index):
    return NavigationState(index)


class TestHorizontal:
    """LEFT/RIGHT walk the flattened sequence and saturate."""

    @pytest.mark.parametrize("sizes", [(1,), (5,), (3, 12), (8, 0, 9)])
    def test_right_reaches_end_then_saturates(self, nav, sizes):
        length = sum(sizes)
        state = at(0)
        for _ in range(length - 1):
            state = nav.move(state, RIGHT, sizes)
        assert state == at(length - 1)
        assert nav.move(state, RIGHT, sizes) == at(length - 1)

    def test_left_from_zero_is_noop(self, nav):
        assert nav.move(at(0), LEFT, (3, 12)) == at(0)

    def test_left_crosses_section_boundary(self, nav):
        assert nav.move(at(3), LEFT, (3, 12)) == at(2)

    def test_left_right_from_search_are_not_intercepted(self, nav):
        assert not nav.intercepts(SEARCH, LEFT)
        assert not nav.intercepts(SEARCH, RIGHT)
        assert nav.intercepts(SEARCH, DOWN)
        assert nav.intercepts(at(0), LEFT)


class TestFromSearch:
    def test_down_enters_grid_at_first_item(self, nav):
        assert nav.move(SEARCH, DOWN, (3, 12)) == at(0)

    def test_down_on_empty_sequence_stays_in_search(self, nav):
        assert nav.move(SEARCH, DOWN, ()) == SEARCH
        assert nav.move(SEARCH, DOWN, (0,)) == SEARCH

    def test_up_from_search_is_noop(self, nav):
        assert nav.move(SEARCH, UP, (3,)) == SEARCH


class TestVertical:
    """UP/DOWN move by rows and respect section boundaries."""

    def test_down_within_section(self, nav):
        assert nav.move(at(1), DOWN, (20,)) == at(9)

    def test_up_within_section(self, nav):
        assert nav.move(at(9), UP, (20,)) == at(1)

    def test_down_into_next_section_keeps_column(self, nav):
        # recent: 0-2, all: 3-14
        assert nav.move(at(1), DOWN, (3, 12)) == at(4)

    def test_up_into_previous_section_keeps_column(self, nav):
        assert nav.move(at(4), UP, (3, 12)) == at(1)

    def test_down_then_up_are_inverse_here(self, nav):
        sizes = (3, 12)
        assert nav.move(nav.move(at(1), DOWN, sizes), UP, sizes) == at(1)

    def test_down_clamps_to_last_item_of_short_section(self, nav):
        # column 6 of "all" row 0 -> "tail" only has 2 items
        assert nav.move(at(6), DOWN, (8, 2)) == at(9)

    def test_down_from_partial_last_row_jumps_sections(self, nav):
        # index 9 is offset 9 in a 12-item section: 9 + 8 >= 12
        assert nav.move(at(9), DOWN, (12, 5)) == at(13)

    def test_down_on_last_row_of_last_section_saturates(self, nav):
        assert nav.move(at(13), DOWN, (3, 12)) == at(13)

    def test_down_skips_empty_sections(self, nav):
        assert nav.move(at(2), DOWN, (3, 0, 4)) == at(5)

    def test_up_lands_on_last_row_of_previous_section(self, nav):
        # previous section has 11 items: last row starts at offset 8
        assert nav.move(at(12), UP, (11, 5)) == at(9)

    def test_up_clamps_to_last_item_of_previous_section(self, nav):
        # column 5 of next section, previous last row holds offsets 8-10
        assert nav.move(at(16), UP, (11, 8)) == at(10)

    def test_up_from_first_section_returns_to_search(self, nav):
        assert nav.move(at(2), UP, (3, 12)) == SEARCH

    def test_up_from_first_row_skips_empty_sections_to_search(self, nav):
        assert nav.move(at(0), UP, (0, 4)) == SEARCH


class TestDegenerateInput:
    def test_moves_on_empty_sequence_are_noops(self, nav):
        for direction in Direction:
            assert nav.move(at(0), direction, ()) == at(0)

    def test_out_of_range_index_is_noop(self, nav):
        assert nav.move(at(20), DOWN, (3, 4)) == at(20)

    def test_clamped_resets_to_search(self):
        assert at(5).clamped(5) == SEARCH
        assert at(4).clamped(5) == at(4)
        assert SEARCH.clamped(0) == SEARCH

    def test_single_column_grid(self):
        nav = GridNavigator(columns=1)
        assert nav.move(at(0), DOWN, (3,)) == at(1)
        assert nav.move(at(0), UP, (3,)) == SEARCH
