"""Nested board tree used for rendering and export."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .entities import Board, BoardList, Card, Swimlane


class ListNode(BaseModel):
    """A list with its cards in position order."""

    board_list: BoardList
    cards: list[Card] = Field(default_factory=list)


class SwimlaneNode(BaseModel):
    """A swimlane with its lists in position order."""

    swimlane: Swimlane
    lists: list[ListNode] = Field(default_factory=list)


class BoardTree(BaseModel):
    """A full board: swimlanes, lists and cards, each level position-ordered."""

    board: Board
    swimlanes: list[SwimlaneNode] = Field(default_factory=list)

    @property
    def card_count(self) -> int:
        return sum(len(ln.cards) for sn in self.swimlanes for ln in sn.lists)

    def find_card(self, card_id: int) -> tuple[int, int, int] | None:
        """Locate a card as (swimlane_index, list_index, card_index)."""
        for s_idx, sn in enumerate(self.swimlanes):
            for l_idx, ln in enumerate(sn.lists):
                for c_idx, card in enumerate(ln.cards):
                    if card.id == card_id:
                        return (s_idx, l_idx, c_idx)
        return None

    def find_list(self, list_id: int) -> tuple[int, int] | None:
        """Locate a list as (swimlane_index, list_index)."""
        for s_idx, sn in enumerate(self.swimlanes):
            for l_idx, ln in enumerate(sn.lists):
                if ln.board_list.id == list_id:
                    return (s_idx, l_idx)
        return None

    def find_swimlane(self, swimlane_id: int) -> int | None:
        for s_idx, sn in enumerate(self.swimlanes):
            if sn.swimlane.id == swimlane_id:
                return s_idx
        return None
