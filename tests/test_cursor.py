"""Tests for BoardCursor."""

from laneboard.models import (
    Board,
    BoardList,
    BoardTree,
    Card,
    EntityKind,
    ItemRef,
    ListNode,
    Swimlane,
    SwimlaneNode,
)
from laneboard.ui.cursor import BoardCursor


def make_tree(layout: list[list[int]]) -> BoardTree:
    """
    Build a tree from card counts: layout[s][l] = number of cards.

    Ids: swimlanes 10+s, lists 100+10*s+l, cards 1000+100*s+10*l+c.
    """
    swimlanes = []
    for s, lane in enumerate(layout):
        lists = []
        for l_idx, count in enumerate(lane):
            list_id = 100 + 10 * s + l_idx
            cards = [
                Card(id=1000 + 100 * s + 10 * l_idx + c, list_id=list_id, title=f"c{c}", position=c)
                for c in range(count)
            ]
            lists.append(
                ListNode(
                    board_list=BoardList(id=list_id, swimlane_id=10 + s, name=f"l{l_idx}", position=l_idx),
                    cards=cards,
                )
            )
        swimlanes.append(
            SwimlaneNode(swimlane=Swimlane(id=10 + s, board_id=1, name=f"s{s}", position=s), lists=lists)
        )
    return BoardTree(board=Board(id=1, name="b"), swimlanes=swimlanes)


class TestSelection:
    """Tests for selected()."""

    def test_empty_board(self):
        assert BoardCursor().selected(make_tree([])) is None

    def test_levels(self):
        tree = make_tree([[2, 1]])
        cursor = BoardCursor()

        assert cursor.selected(tree) == ItemRef.card(1000)
        cursor.cycle_level()
        assert cursor.selected(tree) == ItemRef.board_list(100)
        cursor.cycle_level()
        assert cursor.selected(tree) == ItemRef.swimlane(10)
        assert cursor.cycle_level() is EntityKind.CARD

    def test_empty_list_has_no_card(self):
        assert BoardCursor().selected(make_tree([[0]])) is None


class TestStepping:
    """Tests for cursor movement."""

    def test_horizontal_clamps(self):
        tree = make_tree([[1, 3]])
        cursor = BoardCursor()
        cursor.step_horizontal(tree, 1)
        cursor.step_horizontal(tree, 1)
        assert cursor.list == 1

    def test_horizontal_keeps_card_index_in_range(self):
        tree = make_tree([[3, 1]])
        cursor = BoardCursor()
        cursor.card = 2
        cursor.step_horizontal(tree, 1)
        assert cursor.selected(tree) == ItemRef.card(1010)

    def test_vertical_within_list(self):
        tree = make_tree([[3]])
        cursor = BoardCursor()
        cursor.step_vertical(tree, 1)
        assert cursor.selected(tree) == ItemRef.card(1001)

    def test_vertical_spills_to_next_swimlane(self):
        tree = make_tree([[2], [2]])
        cursor = BoardCursor()
        cursor.step_vertical(tree, 1)
        cursor.step_vertical(tree, 1)
        assert cursor.selected(tree) == ItemRef.card(1100)

    def test_moving_up_lands_on_last_card(self):
        tree = make_tree([[3], [1]])
        cursor = BoardCursor()
        cursor.swimlane = 1
        cursor.step_vertical(tree, -1)
        assert cursor.selected(tree) == ItemRef.card(1002)

    def test_swimlane_level_steps_lanes(self):
        tree = make_tree([[1], [1], [1]])
        cursor = BoardCursor()
        cursor.level = EntityKind.SWIMLANE
        cursor.step_vertical(tree, 1)
        cursor.step_horizontal(tree, 1)
        assert cursor.selected(tree) == ItemRef.swimlane(11)


class TestFocus:
    """Tests for focus()."""

    def test_focus_card(self):
        tree = make_tree([[1], [0, 2]])
        cursor = BoardCursor()
        assert cursor.focus(tree, ItemRef.card(1111))
        assert (cursor.swimlane, cursor.list, cursor.card) == (1, 1, 1)
        assert cursor.level is EntityKind.CARD

    def test_focus_list_switches_level(self):
        tree = make_tree([[1], [0, 2]])
        cursor = BoardCursor()
        assert cursor.focus(tree, ItemRef.board_list(110))
        assert cursor.selected(tree) == ItemRef.board_list(110)

    def test_focus_missing(self):
        cursor = BoardCursor()
        assert not cursor.focus(make_tree([[1]]), ItemRef.card(5))
        assert not cursor.focus(make_tree([[1]]), ItemRef.board(1))

    def test_clamp_after_items_removed(self):
        cursor = BoardCursor()
        cursor.swimlane, cursor.list, cursor.card = 3, 2, 9
        cursor.clamp(make_tree([[1, 4]]))
        assert (cursor.swimlane, cursor.list, cursor.card) == (0, 1, 3)
