"""Service for deep-copying boards, swimlanes, lists and cards."""

from __future__ import annotations

import logging

from ..models import Board, BoardList, Card, EntityKind, ItemRef, Swimlane
from ..repositories import StoreError
from ..utils import now_utc
from . import positions
from .base import BaseService

logger = logging.getLogger(__name__)


class CloneService(BaseService):
    """
    Service for cloning an entity together with all of its descendants.

    The top-level copy gets the configured copy suffix and a slot next to
    the original. Descendants keep their original names and positions
    inside the freshly created parent. Each clone runs as one transaction,
    so a failure leaves no partial copy behind.
    """

    def clone(self, ref: ItemRef) -> ItemRef | None:
        """Clone any entity; returns a ref to the copy, or None on failure."""
        cloners = {
            EntityKind.BOARD: self.clone_board,
            EntityKind.SWIMLANE: self.clone_swimlane,
            EntityKind.LIST: self.clone_list,
            EntityKind.CARD: self.clone_card,
        }
        copy = cloners[ref.kind](ref.id)
        if copy is None:
            return None
        return ItemRef(kind=ref.kind, id=copy.id)

    @property
    def _suffix(self) -> str:
        return self._get_config().copy_suffix

    # --- Top-level clones ---

    def clone_board(self, board_id: int) -> Board | None:
        """Copy a board and everything on it into a new board."""
        try:
            board = self.repository.get_board(board_id)
            if board is None:
                logger.debug("clone_board: board not found: %d", board_id)
                return None

            with self.repository.transaction():
                new_board_id = self.repository.create_board(
                    board.name + self._suffix, board.description
                )
                for swimlane in self.repository.get_swimlanes(board_id):
                    self._copy_swimlane(swimlane, new_board_id, swimlane.position, swimlane.name)
                self._finish_container(EntityKind.SWIMLANE, new_board_id)
        except StoreError as e:
            logger.warning("Error cloning board %d: %s", board_id, e)
            return None

        logger.info("Board cloned: %d -> %d", board_id, new_board_id)
        return self.repository.get_board(new_board_id)

    def clone_swimlane(self, swimlane_id: int) -> Swimlane | None:
        """Copy a swimlane into the slot directly below the original."""
        try:
            swimlane = self.repository.get_swimlane(swimlane_id)
            if swimlane is None:
                logger.debug("clone_swimlane: swimlane not found: %d", swimlane_id)
                return None

            with self.repository.transaction():
                # Open a slot right after the original
                self.repository.shift_positions(
                    EntityKind.SWIMLANE, swimlane.board_id, swimlane.position, 1
                )
                new_id = self._copy_swimlane(
                    swimlane,
                    swimlane.board_id,
                    swimlane.position + 1,
                    swimlane.name + self._suffix,
                )
        except StoreError as e:
            logger.warning("Error cloning swimlane %d: %s", swimlane_id, e)
            return None

        logger.info("Swimlane cloned: %d -> %d", swimlane_id, new_id)
        self._notify(swimlane.board_id)
        return self.repository.get_swimlane(new_id)

    def clone_list(self, list_id: int) -> BoardList | None:
        """Copy a list to the end of its swimlane."""
        try:
            board_list = self.repository.get_list(list_id)
            if board_list is None:
                logger.debug("clone_list: list not found: %d", list_id)
                return None

            with self.repository.transaction():
                max_position = self.repository.max_position(EntityKind.LIST, board_list.swimlane_id)
                new_id = self._copy_list(
                    board_list,
                    board_list.swimlane_id,
                    positions.append_position(max_position),
                    board_list.name + self._suffix,
                )
            board_id = self.repository.board_id_for(EntityKind.LIST, new_id)
        except StoreError as e:
            logger.warning("Error cloning list %d: %s", list_id, e)
            return None

        logger.info("List cloned: %d -> %d", list_id, new_id)
        self._notify(board_id)
        return self.repository.get_list(new_id)

    def clone_card(self, card_id: int) -> Card | None:
        """Copy a card to the end of its list."""
        try:
            card = self.repository.get_card(card_id)
            if card is None:
                logger.debug("clone_card: card not found: %d", card_id)
                return None

            with self.repository.transaction():
                max_position = self.repository.max_position(EntityKind.CARD, card.list_id)
                new_id = self._copy_card(
                    card,
                    card.list_id,
                    positions.append_position(max_position),
                    card.title + self._suffix,
                )
            board_id = self.repository.board_id_for(EntityKind.CARD, new_id)
        except StoreError as e:
            logger.warning("Error cloning card %d: %s", card_id, e)
            return None

        logger.info("Card cloned: %d -> %d", card_id, new_id)
        self._notify(board_id)
        return self.repository.get_card(new_id)

    # --- Recursive copies (run inside the caller's transaction) ---

    def _copy_swimlane(self, swimlane: Swimlane, board_id: int, position: int, name: str) -> int:
        new_id = self.repository.create_child(
            EntityKind.SWIMLANE, board_id, position, {"name": name}
        )
        for board_list in self.repository.get_lists(swimlane.id):
            self._copy_list(board_list, new_id, board_list.position, board_list.name)
        self._finish_container(EntityKind.LIST, new_id)
        return new_id

    def _copy_list(self, board_list: BoardList, swimlane_id: int, position: int, name: str) -> int:
        new_id = self.repository.create_child(EntityKind.LIST, swimlane_id, position, {"name": name})
        for card in self.repository.get_cards(board_list.id):
            self._copy_card(card, new_id, card.position, card.title)
        self._finish_container(EntityKind.CARD, new_id)
        return new_id

    def _copy_card(self, card: Card, list_id: int, position: int, title: str) -> int:
        return self.repository.create_child(
            EntityKind.CARD,
            list_id,
            position,
            {
                "title": title,
                "description": card.description,
                "created_at": now_utc(),
                "attachment": card.attachment,
            },
        )

    def _finish_container(self, kind: EntityKind, parent_id: int) -> None:
        """Renumber the copied children of a new container if configured to."""
        if self._get_config().compact_after_clone:
            self._compact_children(kind, parent_id)
