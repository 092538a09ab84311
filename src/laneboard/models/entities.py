"""Entity models for boards, swimlanes, lists and cards."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import EntityKind

COPY_SUFFIX = " (Copy)"


class Board(BaseModel):
    """Root of the hierarchy. Boards are not positioned."""

    id: int
    name: str
    description: str = ""
    created_at: datetime | None = None


class Swimlane(BaseModel):
    """A horizontal band of lists on a board."""

    id: int
    board_id: int
    name: str
    position: int = 0


class BoardList(BaseModel):
    """A column of cards inside a swimlane."""

    id: int
    swimlane_id: int
    name: str
    position: int = 0


class Card(BaseModel):
    """A single card inside a list."""

    id: int
    list_id: int
    title: str
    description: str = ""
    position: int = 0
    created_at: datetime | None = None
    attachment: bytes | None = None

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment)


class ItemRef(BaseModel):
    """Kind-tagged handle to any entity.

    Move, reorder, clone and delete commands all take an ItemRef and
    dispatch on its kind.
    """

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    id: int

    @classmethod
    def board(cls, board_id: int) -> "ItemRef":
        return cls(kind=EntityKind.BOARD, id=board_id)

    @classmethod
    def swimlane(cls, swimlane_id: int) -> "ItemRef":
        return cls(kind=EntityKind.SWIMLANE, id=swimlane_id)

    @classmethod
    def board_list(cls, list_id: int) -> "ItemRef":
        return cls(kind=EntityKind.LIST, id=list_id)

    @classmethod
    def card(cls, card_id: int) -> "ItemRef":
        return cls(kind=EntityKind.CARD, id=card_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


class SiblingRef(BaseModel):
    """An (id, position) pair within one sibling set."""

    model_config = ConfigDict(frozen=True)

    id: int
    position: int


class ParentRef(BaseModel):
    """Where an entity lives: its parent id and its position there."""

    model_config = ConfigDict(frozen=True)

    parent_id: int
    position: int


class ViewContext(BaseModel):
    """Per-session view state owned by the presentation layer."""

    active_board_id: int | None = None
    selection: set[ItemRef] = Field(default_factory=set)

    def select(self, ref: ItemRef) -> None:
        self.selection.add(ref)

    def deselect(self, ref: ItemRef) -> None:
        self.selection.discard(ref)

    def toggle(self, ref: ItemRef) -> None:
        """Add ref to the selection, or remove it if already selected."""
        if ref in self.selection:
            self.selection.discard(ref)
        else:
            self.selection.add(ref)

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected_of_kind(self, kind: EntityKind) -> list[ItemRef]:
        """Selected refs of one kind, ordered by id for stable iteration."""
        return sorted((r for r in self.selection if r.kind is kind), key=lambda r: r.id)
