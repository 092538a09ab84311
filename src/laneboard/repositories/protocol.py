"""Repository protocol for hierarchical board storage."""

from contextlib import AbstractContextManager
from typing import Any, Protocol

from ..models import Board, BoardList, Card, EntityKind, ParentRef, SiblingRef, Swimlane


class RepositoryProtocol(Protocol):
    """Interface for board storage backends.

    Rows of every positioned kind (swimlane, list, card) carry a parent id
    and an integer position scoped to that parent. Methods taking a ``kind``
    address rows of that kind; ``parent_id`` always refers to a row of
    ``kind.parent``.

    All methods raise StoreError on backend failure. Single calls outside
    ``transaction()`` are committed immediately.
    """

    # --- Ordering queries ---

    def get_children(self, kind: EntityKind, parent_id: int) -> list[SiblingRef]:
        """Get the sibling set under a parent.

        Returns:
            (id, position) pairs sorted ascending by position, then id.
        """
        ...

    def get_parent(self, kind: EntityKind, item_id: int) -> ParentRef | None:
        """Get an item's parent id and position, or None if not found."""
        ...

    def find_at_position(self, kind: EntityKind, parent_id: int, position: int) -> int | None:
        """Get the id of the sibling at an exact position, or None."""
        ...

    def max_position(self, kind: EntityKind, parent_id: int) -> int | None:
        """Get the highest sibling position, or None for an empty sibling set."""
        ...

    # --- Position writes ---

    def set_position(self, kind: EntityKind, item_id: int, position: int) -> None:
        """Set an item's position without touching its parent."""
        ...

    def set_parent(self, kind: EntityKind, item_id: int, parent_id: int, position: int) -> None:
        """Move an item under a new parent at the given position."""
        ...

    def shift_positions(
        self, kind: EntityKind, parent_id: int, after_position: int, delta: int
    ) -> None:
        """Add delta to every sibling whose position is greater than after_position."""
        ...

    # --- Row CRUD ---

    def create_board(self, name: str, description: str = "") -> int:
        """Create a board and return its id."""
        ...

    def create_child(
        self, kind: EntityKind, parent_id: int, position: int, fields: dict[str, Any]
    ) -> int:
        """Create a swimlane, list or card under a parent and return its id."""
        ...

    def read_fields(self, kind: EntityKind, item_id: int) -> dict[str, Any] | None:
        """Read a row's non-structural fields, or None if not found."""
        ...

    def update_fields(self, kind: EntityKind, item_id: int, fields: dict[str, Any]) -> None:
        """Update non-structural fields (name, title, description, attachment)."""
        ...

    def delete(self, kind: EntityKind, item_id: int) -> None:
        """Delete a row and, by cascade, all of its descendants.

        Note:
            Does not raise an error if the row doesn't exist.
        """
        ...

    # --- Typed reads ---

    def get_board(self, board_id: int) -> Board | None: ...

    def list_boards(self) -> list[Board]:
        """All boards ordered by name."""
        ...

    def get_swimlane(self, swimlane_id: int) -> Swimlane | None: ...

    def get_list(self, list_id: int) -> BoardList | None: ...

    def get_card(self, card_id: int) -> Card | None: ...

    def get_swimlanes(self, board_id: int) -> list[Swimlane]: ...

    def get_lists(self, swimlane_id: int) -> list[BoardList]: ...

    def get_cards(self, list_id: int) -> list[Card]: ...

    def board_id_for(self, kind: EntityKind, item_id: int) -> int | None:
        """Resolve the board owning an item of any kind."""
        ...

    # --- Lifecycle ---

    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one unit of work, rolled back on any exception.

        Nested calls join the outermost transaction.
        """
        ...

    def close(self) -> None: ...
