"""Service for create, rename and delete of boards, swimlanes, lists and cards."""

from __future__ import annotations

import logging
from typing import Any

from ..models import Board, BoardList, Card, EntityKind, ItemRef, Swimlane
from ..repositories import StoreError
from ..utils import now_utc
from . import positions
from .base import BaseService

logger = logging.getLogger(__name__)

Item = Board | Swimlane | BoardList | Card


class ItemService(BaseService):
    """Service for CRUD operations at every level of the hierarchy.

    New swimlanes, lists and cards are appended after their last sibling.
    Deletes cascade to descendants and close the gap in the sibling set.
    """

    # --- Create ---

    def create_board(self, name: str, description: str = "") -> Board | None:
        """Create a new, empty board."""
        name = name.strip()
        if not name:
            logger.debug("create_board: empty name")
            return None
        try:
            board_id = self.repository.create_board(name, description)
        except StoreError as e:
            logger.warning("Error creating board %r: %s", name, e)
            return None
        logger.info("Board created: %d (%s)", board_id, name)
        return self.repository.get_board(board_id)

    def create_swimlane(self, board_id: int, name: str) -> Swimlane | None:
        """Append a swimlane to a board."""
        new_id = self._create_child(EntityKind.SWIMLANE, board_id, {"name": name.strip()})
        return self.repository.get_swimlane(new_id) if new_id is not None else None

    def create_list(self, swimlane_id: int, name: str) -> BoardList | None:
        """Append a list to a swimlane."""
        new_id = self._create_child(EntityKind.LIST, swimlane_id, {"name": name.strip()})
        return self.repository.get_list(new_id) if new_id is not None else None

    def create_card(
        self,
        list_id: int,
        title: str,
        description: str = "",
        attachment: bytes | None = None,
    ) -> Card | None:
        """Append a card to a list."""
        fields = {
            "title": title.strip(),
            "description": description,
            "created_at": now_utc(),
            "attachment": attachment,
        }
        new_id = self._create_child(EntityKind.CARD, list_id, fields)
        return self.repository.get_card(new_id) if new_id is not None else None

    def _create_child(self, kind: EntityKind, parent_id: int, fields: dict[str, Any]) -> int | None:
        """Insert a child at max(sibling position) + 1."""
        parent_kind = kind.parent
        if parent_kind is None:
            raise ValueError(f"A {kind.value} has no parent to create it under")
        if not fields[kind.label_field]:
            logger.debug("create %s: empty %s", kind.value, kind.label_field)
            return None

        try:
            if self.repository.read_fields(parent_kind, parent_id) is None:
                logger.debug("create %s: %s not found: %d", kind.value, parent_kind.value, parent_id)
                return None
            with self.repository.transaction():
                max_position = self.repository.max_position(kind, parent_id)
                position = positions.append_position(max_position)
                new_id = self.repository.create_child(kind, parent_id, position, fields)
            board_id = self.repository.board_id_for(kind, new_id)
        except StoreError as e:
            logger.warning("Error creating %s under %d: %s", kind.value, parent_id, e)
            return None

        logger.info(
            "%s created: %d (%s) at position %d",
            kind.value.capitalize(),
            new_id,
            fields[kind.label_field],
            position,
        )
        self._notify(board_id)
        return new_id

    # --- Read ---

    def get(self, ref: ItemRef) -> Item | None:
        """Load any entity by ref."""
        getters = {
            EntityKind.BOARD: self.repository.get_board,
            EntityKind.SWIMLANE: self.repository.get_swimlane,
            EntityKind.LIST: self.repository.get_list,
            EntityKind.CARD: self.repository.get_card,
        }
        return getters[ref.kind](ref.id)

    # --- Update ---

    def rename(self, ref: ItemRef, name: str) -> bool:
        """Change the name of a board, swimlane or list, or a card's title.

        Never touches position or parent. Empty names are ignored.
        """
        name = name.strip()
        if not name:
            logger.debug("rename: empty name for %s", ref)
            return False
        return self._update(ref, {ref.kind.label_field: name})

    def update_board(self, board_id: int, name: str, description: str) -> Board | None:
        """Set a board's name and description."""
        name = name.strip()
        if not name:
            logger.debug("update_board: empty name for board %d", board_id)
            return None
        if not self._update(ItemRef.board(board_id), {"name": name, "description": description}):
            return None
        return self.repository.get_board(board_id)

    def update_card(self, card_id: int, title: str, description: str) -> Card | None:
        """Set a card's title and description."""
        title = title.strip()
        if not title:
            logger.debug("update_card: empty title for card %d", card_id)
            return None
        if not self._update(ItemRef.card(card_id), {"title": title, "description": description}):
            return None
        return self.repository.get_card(card_id)

    def set_attachment(self, card_id: int, data: bytes | None) -> bool:
        """Attach a binary blob to a card, or clear it with None."""
        return self._update(ItemRef.card(card_id), {"attachment": data or None})

    def _update(self, ref: ItemRef, fields: dict[str, Any]) -> bool:
        try:
            if self.repository.read_fields(ref.kind, ref.id) is None:
                logger.debug("update: %s not found", ref)
                return False
            self.repository.update_fields(ref.kind, ref.id, fields)
            board_id = self.repository.board_id_for(ref.kind, ref.id)
        except StoreError as e:
            logger.warning("Error updating %s: %s", ref, e)
            return False
        logger.info("Updated %s: %s", ref, ", ".join(sorted(fields)))
        self._notify(board_id)
        return True

    # --- Delete ---

    def delete(self, ref: ItemRef) -> bool:
        """Delete an entity and its descendants, then compact its former siblings."""
        try:
            board_id = self.repository.board_id_for(ref.kind, ref.id)
            if board_id is None:
                logger.debug("delete: %s not found", ref)
                return False

            with self.repository.transaction():
                if ref.kind.is_positioned:
                    parent = self.repository.get_parent(ref.kind, ref.id)
                    self.repository.delete(ref.kind, ref.id)
                    if parent is not None:
                        self._compact_children(ref.kind, parent.parent_id)
                else:
                    self.repository.delete(ref.kind, ref.id)
        except StoreError as e:
            logger.warning("Error deleting %s: %s", ref, e)
            return False

        logger.info("Deleted %s", ref)
        if ref.kind is not EntityKind.BOARD:
            self._notify(board_id)
        return True
