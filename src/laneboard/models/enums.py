"""Enumerations for entity kinds, directions and move outcomes."""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    """The four levels of the board hierarchy."""

    BOARD = "board"
    SWIMLANE = "swimlane"
    LIST = "list"
    CARD = "card"

    @property
    def table(self) -> str:
        """Storage table holding rows of this kind."""
        return {
            EntityKind.BOARD: "boards",
            EntityKind.SWIMLANE: "swimlanes",
            EntityKind.LIST: "lists",
            EntityKind.CARD: "cards",
        }[self]

    @property
    def parent(self) -> EntityKind | None:
        """Kind of the immediate parent (None for boards)."""
        return {
            EntityKind.BOARD: None,
            EntityKind.SWIMLANE: EntityKind.BOARD,
            EntityKind.LIST: EntityKind.SWIMLANE,
            EntityKind.CARD: EntityKind.LIST,
        }[self]

    @property
    def child(self) -> EntityKind | None:
        """Kind of the direct children (None for cards)."""
        return {
            EntityKind.BOARD: EntityKind.SWIMLANE,
            EntityKind.SWIMLANE: EntityKind.LIST,
            EntityKind.LIST: EntityKind.CARD,
            EntityKind.CARD: None,
        }[self]

    @property
    def parent_column(self) -> str | None:
        """Foreign key column pointing at the parent row."""
        parent = self.parent
        if parent is None:
            return None
        return f"{parent.value}_id"

    @property
    def label_field(self) -> str:
        """Field holding the display label (cards use a title)."""
        return "title" if self is EntityKind.CARD else "name"

    @property
    def is_positioned(self) -> bool:
        """Boards are ordered by name, everything else by position."""
        return self is not EntityKind.BOARD


class Direction(str, Enum):
    """Directional move commands."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> int:
        return -1 if self in (Direction.UP, Direction.LEFT) else 1


class MoveOutcome(str, Enum):
    """Result of a directional move or drop."""

    NOOP = "noop"  # Boundary or missing target, nothing written
    SWAP = "swap"  # Exchanged positions with an adjacent sibling
    REPARENT = "reparent"  # Moved to another parent, appended at the end
    REORDER = "reorder"  # Placed at a new index within the same parent
    FAILED = "failed"  # Store error, all writes rolled back

    @property
    def changed(self) -> bool:
        """Whether the store was modified."""
        return self in (MoveOutcome.SWAP, MoveOutcome.REPARENT, MoveOutcome.REORDER)
