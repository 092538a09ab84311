"""Tests for MoveService: swaps, cross-parent moves and drops."""

import pytest

from laneboard.models import Direction, ItemRef, MoveOutcome
from laneboard.repositories import SqliteRepository, StoreError
from laneboard.services import BoardService, ItemService, MoveService


@pytest.fixture
def moves(repo: SqliteRepository, changes: list[int]) -> MoveService:
    return MoveService(repo, on_change=changes.append)


@pytest.fixture
def board(repo: SqliteRepository) -> dict[str, int]:
    """
    Board with two swimlanes:

        S1: L1 [A, B, C]  L2 []
        S2: L3 [D]
    """
    items = ItemService(repo)
    ids: dict[str, int] = {"board": items.create_board("Board").id}
    ids["S1"] = items.create_swimlane(ids["board"], "S1").id
    ids["S2"] = items.create_swimlane(ids["board"], "S2").id
    ids["L1"] = items.create_list(ids["S1"], "L1").id
    ids["L2"] = items.create_list(ids["S1"], "L2").id
    ids["L3"] = items.create_list(ids["S2"], "L3").id
    for title in ("A", "B", "C"):
        ids[title] = items.create_card(ids["L1"], title).id
    ids["D"] = items.create_card(ids["L3"], "D").id
    return ids


def cards(repo: SqliteRepository, list_id: int) -> list[tuple[str, int]]:
    return [(c.title, c.position) for c in repo.get_cards(list_id)]


def lists(repo: SqliteRepository, swimlane_id: int) -> list[tuple[str, int]]:
    return [(bl.name, bl.position) for bl in repo.get_lists(swimlane_id)]


def swimlanes(repo: SqliteRepository, board_id: int) -> list[tuple[str, int]]:
    return [(s.name, s.position) for s in repo.get_swimlanes(board_id)]


class TestSwap:
    """Tests for same-parent swaps."""

    def test_card_down_swaps_with_next(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_down(ItemRef.card(board["A"])) is MoveOutcome.SWAP
        assert cards(repo, board["L1"]) == [("B", 0), ("A", 1), ("C", 2)]

    def test_swap_round_trip(self, moves: MoveService, repo: SqliteRepository, board):
        ref = ItemRef.card(board["B"])
        moves.move_up(ref)
        moves.move_down(ref)
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]

    def test_boundaries_are_noops(self, moves: MoveService, repo: SqliteRepository, board, changes: list[int]):
        changes.clear()
        assert moves.move_up(ItemRef.card(board["A"])) is MoveOutcome.NOOP
        assert moves.move_down(ItemRef.card(board["C"])) is MoveOutcome.NOOP
        assert moves.move_up(ItemRef.swimlane(board["S1"])) is MoveOutcome.NOOP
        assert moves.move_right(ItemRef.board_list(board["L2"])) is MoveOutcome.NOOP
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]
        assert changes == []

    def test_single_card_cannot_move(self, moves: MoveService, board):
        assert moves.move_down(ItemRef.card(board["D"])) is MoveOutcome.NOOP

    def test_list_left_right(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_left(ItemRef.board_list(board["L2"])) is MoveOutcome.SWAP
        assert lists(repo, board["S1"]) == [("L2", 0), ("L1", 1)]

    def test_swimlane_up_down(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_down(ItemRef.swimlane(board["S1"])) is MoveOutcome.SWAP
        assert swimlanes(repo, board["board"]) == [("S2", 0), ("S1", 1)]

    def test_swap_notifies(self, moves: MoveService, board, changes: list[int]):
        changes.clear()
        moves.move_down(ItemRef.card(board["A"]))
        assert changes == [board["board"]]

    def test_missing_item(self, moves: MoveService, board):
        assert moves.move_up(ItemRef.card(9999)) is MoveOutcome.NOOP

    def test_failure_rolls_back(
        self, moves: MoveService, repo: SqliteRepository, board, changes: list[int], fail_on_call
    ):
        changes.clear()
        fail_on_call(repo, "set_position", 2)

        assert moves.move_down(ItemRef.card(board["A"])) is MoveOutcome.FAILED
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]
        assert changes == []


class TestUnsupportedMoves:
    """Tests for kind/direction combinations that are programming errors."""

    @pytest.mark.parametrize("direction", list(Direction))
    def test_boards_do_not_move(self, moves: MoveService, board, direction: Direction):
        with pytest.raises(ValueError):
            moves.move(ItemRef.board(board["board"]), direction)

    @pytest.mark.parametrize("direction", [Direction.LEFT, Direction.RIGHT])
    def test_swimlanes_do_not_move_sideways(self, moves: MoveService, board, direction: Direction):
        with pytest.raises(ValueError):
            moves.move(ItemRef.swimlane(board["S1"]), direction)


class TestAdjacentParent:
    """Tests for moving a card to a neighboring list or a list to a neighboring swimlane."""

    def test_card_right_appends_and_compacts(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_right(ItemRef.card(board["A"])) is MoveOutcome.REPARENT

        assert cards(repo, board["L1"]) == [("B", 0), ("C", 1)]
        assert cards(repo, board["L2"]) == [("A", 0)]

    def test_card_appended_after_existing(self, moves: MoveService, repo: SqliteRepository, board):
        moves.move_card_to_right_list(board["A"])
        moves.move_card_to_right_list(board["B"])
        assert cards(repo, board["L2"]) == [("A", 0), ("B", 1)]

    def test_card_left_from_first_list(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_card_to_left_list(board["B"]) is MoveOutcome.NOOP
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]

    def test_card_stays_within_swimlane(self, moves: MoveService, board):
        """L2 is the last list in S1; L3 in S2 is not its right neighbor."""
        moves.move_card_to_right_list(board["A"])
        assert moves.move_card_to_right_list(board["A"]) is MoveOutcome.NOOP

    def test_list_down_to_next_swimlane(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_down(ItemRef.board_list(board["L1"])) is MoveOutcome.REPARENT

        assert lists(repo, board["S1"]) == [("L2", 0)]
        assert lists(repo, board["S2"]) == [("L3", 0), ("L1", 1)]
        # Cards travel with their list
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]

    def test_list_down_from_last_swimlane(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_list_to_below_swimlane(board["L3"]) is MoveOutcome.NOOP
        assert lists(repo, board["S2"]) == [("L3", 0)]

    def test_list_up(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.move_list_to_above_swimlane(board["L3"]) is MoveOutcome.REPARENT
        assert lists(repo, board["S1"]) == [("L1", 0), ("L2", 1), ("L3", 2)]
        assert lists(repo, board["S2"]) == []

    @pytest.mark.parametrize("delta", [0, 2, -2])
    def test_only_immediate_neighbors(self, moves: MoveService, repo: SqliteRepository, board, delta: int):
        with pytest.raises(ValueError):
            moves.move_to_adjacent_parent(ItemRef.card(board["A"]), delta)
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]
        assert cards(repo, board["L2"]) == []

    def test_failure_rolls_back(self, moves: MoveService, repo: SqliteRepository, board, monkeypatch):
        def fail(*args, **kwargs):
            raise StoreError("database is locked")

        monkeypatch.setattr(repo, "set_parent", fail)
        assert moves.move_right(ItemRef.card(board["A"])) is MoveOutcome.FAILED
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]
        assert cards(repo, board["L2"]) == []

    def test_board_stays_dense(self, moves: MoveService, repo: SqliteRepository, board):
        moves.move_right(ItemRef.card(board["B"]))
        moves.move_down(ItemRef.board_list(board["L1"]))
        moves.move_up(ItemRef.swimlane(board["S2"]))
        moves.move_left(ItemRef.card(board["B"]))

        assert BoardService(repo).find_density_violations(board["board"]) == []


class TestDrop:
    """Tests for drop-zone moves."""

    def test_drop_on_other_list_appends(self, moves: MoveService, repo: SqliteRepository, board, changes: list[int]):
        changes.clear()
        assert moves.drop(ItemRef.card(board["B"]), board["L3"]) is MoveOutcome.REPARENT

        assert cards(repo, board["L1"]) == [("A", 0), ("C", 1)]
        assert cards(repo, board["L3"]) == [("D", 0), ("B", 1)]
        assert changes == [board["board"]]

    def test_drop_at_index(self, moves: MoveService, repo: SqliteRepository, board):
        moves.drop(ItemRef.card(board["C"]), board["L3"], index=0)
        assert cards(repo, board["L3"]) == [("C", 0), ("D", 1)]

    def test_drop_on_same_parent(self, moves: MoveService, repo: SqliteRepository, board):
        ref = ItemRef.card(board["C"])
        assert moves.drop(ref, board["L1"]) is MoveOutcome.NOOP
        assert moves.drop(ref, board["L1"], index=0) is MoveOutcome.REORDER
        assert cards(repo, board["L1"]) == [("C", 0), ("A", 1), ("B", 2)]

    def test_drop_list_on_swimlane(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.drop(ItemRef.board_list(board["L3"]), board["S1"], index=1) is MoveOutcome.REPARENT
        assert lists(repo, board["S1"]) == [("L1", 0), ("L3", 1), ("L2", 2)]

    def test_drop_on_missing_target(self, moves: MoveService, repo: SqliteRepository, board):
        assert moves.drop(ItemRef.card(board["A"]), 9999) is MoveOutcome.NOOP
        assert cards(repo, board["L1"]) == [("A", 0), ("B", 1), ("C", 2)]

    def test_drop_swimlane_rejected(self, moves: MoveService, board):
        with pytest.raises(ValueError):
            moves.drop(ItemRef.swimlane(board["S1"]), board["board"])


class TestScenarios:
    """Two swimlanes owning one list each."""

    @pytest.fixture
    def lanes(self, repo: SqliteRepository) -> dict[str, int]:
        items = ItemService(repo)
        ids = {"board": items.create_board("Board").id}
        ids["S1"] = items.create_swimlane(ids["board"], "S1").id
        ids["S2"] = items.create_swimlane(ids["board"], "S2").id
        ids["L1"] = items.create_list(ids["S1"], "L1").id
        ids["L2"] = items.create_list(ids["S2"], "L2").id
        return ids

    def test_list_moves_to_swimlane_above(self, moves: MoveService, repo: SqliteRepository, lanes):
        assert moves.move_list_to_above_swimlane(lanes["L2"]) is MoveOutcome.REPARENT

        assert lists(repo, lanes["S1"]) == [("L1", 0), ("L2", 1)]
        assert lists(repo, lanes["S2"]) == []
        assert BoardService(repo).find_density_violations(lanes["board"]) == []

    def test_last_list_of_last_swimlane_cannot_move_down(self, moves: MoveService, repo: SqliteRepository, lanes):
        assert moves.move_list_to_below_swimlane(lanes["L2"]) is MoveOutcome.NOOP
        assert lists(repo, lanes["S2"]) == [("L2", 0)]
