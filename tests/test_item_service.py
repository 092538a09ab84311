"""Tests for ItemService."""

import pytest

from laneboard.models import EntityKind, ItemRef
from laneboard.repositories import SqliteRepository, StoreError
from laneboard.services import ItemService


@pytest.fixture
def items(repo: SqliteRepository, changes: list[int]) -> ItemService:
    return ItemService(repo, on_change=changes.append)


@pytest.fixture
def board_id(items: ItemService) -> int:
    board = items.create_board("Board")
    assert board is not None
    return board.id


@pytest.fixture
def list_id(items: ItemService, board_id: int) -> int:
    swimlane = items.create_swimlane(board_id, "Lane")
    assert swimlane is not None
    board_list = items.create_list(swimlane.id, "Todo")
    assert board_list is not None
    return board_list.id


def card_order(repo: SqliteRepository, list_id: int) -> list[tuple[str, int]]:
    return [(c.title, c.position) for c in repo.get_cards(list_id)]


class TestCreate:
    """Tests for creating items."""

    def test_boards_have_no_parent(self, items: ItemService, board_id: int):
        with pytest.raises(ValueError):
            items._create_child(EntityKind.BOARD, board_id, {"name": "Nested"})

    def test_children_append_in_order(self, items: ItemService, board_id: int):
        lanes = [items.create_swimlane(board_id, name) for name in ("A", "B", "C")]
        assert [lane.position for lane in lanes] == [0, 1, 2]

    def test_append_after_max_position(self, items: ItemService, repo: SqliteRepository, list_id: int):
        """A gapped set gets max + 1, not count."""
        first = items.create_card(list_id, "First")
        repo.set_position(EntityKind.CARD, first.id, 5)

        card = items.create_card(list_id, "Second")
        assert card.position == 6

    def test_card_fields(self, items: ItemService, list_id: int):
        card = items.create_card(list_id, "  Title  ", "Body", attachment=b"data")

        assert card.title == "Title"
        assert card.description == "Body"
        assert card.attachment == b"data"
        assert card.has_attachment
        assert card.created_at is not None

    def test_empty_name_ignored(self, items: ItemService, board_id: int, changes: list[int]):
        changes.clear()
        assert items.create_swimlane(board_id, "   ") is None
        assert items.create_board("") is None
        assert changes == []

    def test_missing_parent(self, items: ItemService):
        assert items.create_list(999, "Orphan") is None
        assert items.create_card(999, "Orphan") is None

    def test_create_notifies_board(self, items: ItemService, board_id: int, changes: list[int]):
        changes.clear()
        items.create_swimlane(board_id, "Lane")
        assert changes == [board_id]

    def test_store_error_returns_none(
        self, items: ItemService, repo: SqliteRepository, list_id: int, monkeypatch
    ):
        def fail(*args, **kwargs):
            raise StoreError("disk I/O error")

        monkeypatch.setattr(repo, "create_child", fail)
        assert items.create_card(list_id, "Card") is None


class TestUpdate:
    """Tests for rename and field updates."""

    def test_rename_each_kind(self, items: ItemService, repo: SqliteRepository, board_id: int, list_id: int):
        card = items.create_card(list_id, "Old")

        assert items.rename(ItemRef.board(board_id), "New board")
        assert items.rename(ItemRef.board_list(list_id), "Doing")
        assert items.rename(ItemRef.card(card.id), "New title")

        assert repo.get_board(board_id).name == "New board"
        assert repo.get_list(list_id).name == "Doing"
        assert repo.get_card(card.id).title == "New title"

    def test_rename_keeps_position(self, items: ItemService, list_id: int):
        items.create_card(list_id, "A")
        b = items.create_card(list_id, "B")

        items.rename(ItemRef.card(b.id), "Bee")
        assert items.get(ItemRef.card(b.id)).position == 1

    def test_rename_rejects_empty_and_missing(self, items: ItemService, list_id: int):
        assert not items.rename(ItemRef.board_list(list_id), " ")
        assert not items.rename(ItemRef.card(999), "Ghost")

    def test_update_board_and_card(self, items: ItemService, board_id: int, list_id: int):
        card = items.create_card(list_id, "Card")

        board = items.update_board(board_id, "Roadmap", "Q3 plans")
        assert board.name == "Roadmap"
        assert board.description == "Q3 plans"

        updated = items.update_card(card.id, "Card 2", "details")
        assert updated.title == "Card 2"
        assert updated.description == "details"

    def test_set_and_clear_attachment(self, items: ItemService, list_id: int):
        card = items.create_card(list_id, "Card")

        assert items.set_attachment(card.id, b"\x89PNG")
        assert items.get(ItemRef.card(card.id)).attachment == b"\x89PNG"

        assert items.set_attachment(card.id, None)
        assert not items.get(ItemRef.card(card.id)).has_attachment


class TestDelete:
    """Tests for delete."""

    def test_delete_compacts_siblings(self, items: ItemService, repo: SqliteRepository, list_id: int):
        items.create_card(list_id, "A")
        b = items.create_card(list_id, "B")
        items.create_card(list_id, "C")

        assert items.delete(ItemRef.card(b.id))
        assert card_order(repo, list_id) == [("A", 0), ("C", 1)]

    def test_delete_swimlane_cascades(self, items: ItemService, repo: SqliteRepository, board_id: int, list_id: int):
        card = items.create_card(list_id, "Card")
        swimlane_id = repo.get_list(list_id).swimlane_id
        second = items.create_swimlane(board_id, "Second")

        assert items.delete(ItemRef.swimlane(swimlane_id))

        assert repo.get_list(list_id) is None
        assert repo.get_card(card.id) is None
        assert [(s.id, s.position) for s in repo.get_swimlanes(board_id)] == [(second.id, 0)]

    def test_delete_board(self, items: ItemService, repo: SqliteRepository, board_id: int, changes: list[int]):
        changes.clear()
        assert items.delete(ItemRef.board(board_id))
        assert repo.get_board(board_id) is None
        assert changes == []

    def test_delete_missing(self, items: ItemService):
        assert not items.delete(ItemRef.card(123))

    def test_failed_delete_rolls_back(
        self, items: ItemService, repo: SqliteRepository, list_id: int, monkeypatch
    ):
        items.create_card(list_id, "A")
        b = items.create_card(list_id, "B")
        items.create_card(list_id, "C")

        def fail(*args, **kwargs):
            raise StoreError("database is locked")

        monkeypatch.setattr(repo, "set_position", fail)
        assert not items.delete(ItemRef.card(b.id))
        assert card_order(repo, list_id) == [("A", 0), ("B", 1), ("C", 2)]
