"""Service for placing an item at an arbitrary index among its siblings."""

from __future__ import annotations

import logging

from ..models import ItemRef
from ..repositories import StoreError
from .base import BaseService

logger = logging.getLogger(__name__)


class ReorderService(BaseService):
    """Drag-style reordering within one parent."""

    def reorder_to(self, ref: ItemRef, target_index: int) -> bool:
        """
        Move an item to target_index within its current sibling set.

        The index counts siblings with the moved item removed and is clamped
        to [0, sibling count]. The whole set is renumbered 0..n-1.

        Args:
            ref: Swimlane, list or card to move
            target_index: Zero-based slot among the other siblings

        Returns:
            True if any position changed
        """
        if not ref.kind.is_positioned:
            raise ValueError(f"Cannot reorder a {ref.kind.value}: boards are ordered by name")

        try:
            parent = self.repository.get_parent(ref.kind, ref.id)
            if parent is None:
                logger.debug("reorder_to: %s not found", ref)
                return False

            with self.repository.transaction():
                changes = self._place(ref.kind, ref.id, parent.parent_id, target_index)
            board_id = self.repository.board_id_for(ref.kind, ref.id) if changes else None
        except StoreError as e:
            logger.warning("Error reordering %s: %s", ref, e)
            return False

        if not changes:
            logger.debug("reorder_to: %s already at index %d", ref, target_index)
            return False

        logger.debug("Reordered %s to index %d (%d rows renumbered)", ref, target_index, len(changes))
        self._notify(board_id)
        return True
