"""Service for directional moves and drop-zone moves."""

from __future__ import annotations

import logging

from ..models import Direction, EntityKind, ItemRef, MoveOutcome, SiblingRef
from ..repositories import StoreError
from . import positions
from .base import BaseService

logger = logging.getLogger(__name__)

# (kind, direction) -> how the move is carried out
SWAP_MOVES: set[tuple[EntityKind, Direction]] = {
    (EntityKind.SWIMLANE, Direction.UP),
    (EntityKind.SWIMLANE, Direction.DOWN),
    (EntityKind.LIST, Direction.LEFT),
    (EntityKind.LIST, Direction.RIGHT),
    (EntityKind.CARD, Direction.UP),
    (EntityKind.CARD, Direction.DOWN),
}
REPARENT_MOVES: set[tuple[EntityKind, Direction]] = {
    (EntityKind.LIST, Direction.UP),  # to the swimlane above
    (EntityKind.LIST, Direction.DOWN),  # to the swimlane below
    (EntityKind.CARD, Direction.LEFT),  # to the list on the left
    (EntityKind.CARD, Direction.RIGHT),  # to the list on the right
}


class MoveService(BaseService):
    """
    Service for moving swimlanes, lists and cards one step at a time.

    Each move ends in exactly one of three states: no-op (boundary or missing
    target, nothing written), swap with the adjacent sibling, or reparent to
    the adjacent parent with the item appended at the end. A store failure
    rolls the whole move back and reports FAILED.
    """

    def move(self, ref: ItemRef, direction: Direction) -> MoveOutcome:
        """Move an item one step in a direction.

        Raises:
            ValueError: The kind cannot move in that direction (e.g. boards,
                or swimlanes left/right).
        """
        key = (ref.kind, direction)
        if key in SWAP_MOVES:
            return self._swap_with_neighbor(ref, direction.delta)
        if key in REPARENT_MOVES:
            return self.move_to_adjacent_parent(ref, direction.delta)
        raise ValueError(f"Cannot move a {ref.kind.value} {direction.value}")

    def move_up(self, ref: ItemRef) -> MoveOutcome:
        return self.move(ref, Direction.UP)

    def move_down(self, ref: ItemRef) -> MoveOutcome:
        return self.move(ref, Direction.DOWN)

    def move_left(self, ref: ItemRef) -> MoveOutcome:
        return self.move(ref, Direction.LEFT)

    def move_right(self, ref: ItemRef) -> MoveOutcome:
        return self.move(ref, Direction.RIGHT)

    def move_list_to_above_swimlane(self, list_id: int) -> MoveOutcome:
        return self.move_to_adjacent_parent(ItemRef.board_list(list_id), -1)

    def move_list_to_below_swimlane(self, list_id: int) -> MoveOutcome:
        return self.move_to_adjacent_parent(ItemRef.board_list(list_id), 1)

    def move_card_to_left_list(self, card_id: int) -> MoveOutcome:
        return self.move_to_adjacent_parent(ItemRef.card(card_id), -1)

    def move_card_to_right_list(self, card_id: int) -> MoveOutcome:
        return self.move_to_adjacent_parent(ItemRef.card(card_id), 1)

    # --- Same-parent swap ---

    def _swap_with_neighbor(self, ref: ItemRef, delta: int) -> MoveOutcome:
        """Exchange positions with the sibling at position + delta."""
        kind = ref.kind
        try:
            current = self.repository.get_parent(kind, ref.id)
            if current is None:
                logger.debug("move: %s not found", ref)
                return MoveOutcome.NOOP

            max_position = self.repository.max_position(kind, current.parent_id)
            target_position = positions.neighbor_position(current.position, delta, max_position)
            if target_position is None:
                logger.debug("move: %s at boundary (position %d)", ref, current.position)
                return MoveOutcome.NOOP

            target_id = self.repository.find_at_position(kind, current.parent_id, target_position)
            if target_id is None:
                logger.debug("move: no %s at position %d", kind.value, target_position)
                return MoveOutcome.NOOP

            moved, displaced = positions.swap(
                SiblingRef(id=ref.id, position=current.position),
                SiblingRef(id=target_id, position=target_position),
            )
            with self.repository.transaction():
                self.repository.set_position(kind, displaced.id, displaced.position)
                self.repository.set_position(kind, moved.id, moved.position)
            board_id = self.repository.board_id_for(kind, ref.id)
        except StoreError as e:
            logger.warning("Error moving %s: %s", ref, e)
            return MoveOutcome.FAILED

        logger.debug("Swapped %s (pos %d -> %d)", ref, current.position, moved.position)
        self._notify(board_id)
        return MoveOutcome.SWAP

    # --- Cross-parent moves ---

    def move_to_adjacent_parent(self, ref: ItemRef, delta: int) -> MoveOutcome:
        """
        Move a list to the neighboring swimlane, or a card to the neighboring list.

        The neighbor is the parent's sibling at parent position + delta,
        where delta is -1 or 1. The source sibling set is compacted and the
        item is appended after the target's last child.

        Raises:
            ValueError: The item is not a list or card, or delta is not -1 or 1.
        """
        kind = ref.kind
        parent_kind = kind.parent
        if kind not in (EntityKind.LIST, EntityKind.CARD) or parent_kind is None:
            raise ValueError(f"Cannot move a {kind.value} to an adjacent parent")
        if delta not in (-1, 1):
            raise ValueError(f"Adjacent parent offset must be -1 or 1, got {delta}")

        try:
            current = self.repository.get_parent(kind, ref.id)
            if current is None:
                logger.debug("move_to_adjacent_parent: %s not found", ref)
                return MoveOutcome.NOOP

            parent_slot = self.repository.get_parent(parent_kind, current.parent_id)
            if parent_slot is None:
                logger.debug("move_to_adjacent_parent: parent of %s not found", ref)
                return MoveOutcome.NOOP

            target_position = parent_slot.position + delta
            target_parent_id = None
            if target_position >= 0:
                target_parent_id = self.repository.find_at_position(
                    parent_kind, parent_slot.parent_id, target_position
                )
            if target_parent_id is None:
                logger.debug(
                    "move_to_adjacent_parent: no %s at position %d", parent_kind.value, target_position
                )
                return MoveOutcome.NOOP

            with self.repository.transaction():
                new_position = self._reparent(kind, ref.id, current.parent_id, target_parent_id)
            board_id = self.repository.board_id_for(kind, ref.id)
        except StoreError as e:
            logger.warning("Error moving %s to adjacent %s: %s", ref, parent_kind.value, e)
            return MoveOutcome.FAILED

        logger.info(
            "Moved %s: %s %d -> %d (position %d)",
            ref,
            parent_kind.value,
            current.parent_id,
            target_parent_id,
            new_position,
        )
        self._notify(board_id)
        return MoveOutcome.REPARENT

    def drop(self, ref: ItemRef, target_parent_id: int, index: int | None = None) -> MoveOutcome:
        """
        Drop a card onto a list, or a list onto a swimlane.

        Dropping onto a different parent reparents the item, compacts the
        source, and appends at the end (or inserts at ``index``, clamped).
        Dropping onto the current parent reorders when an index is given and
        is a no-op otherwise.
        """
        kind = ref.kind
        parent_kind = kind.parent
        if kind not in (EntityKind.LIST, EntityKind.CARD) or parent_kind is None:
            raise ValueError(f"Cannot drop a {kind.value}")

        try:
            current = self.repository.get_parent(kind, ref.id)
            if current is None:
                logger.debug("drop: %s not found", ref)
                return MoveOutcome.NOOP

            if current.parent_id == target_parent_id:
                if index is None:
                    return MoveOutcome.NOOP
                with self.repository.transaction():
                    changes = self._place(kind, ref.id, target_parent_id, index)
                if not changes:
                    return MoveOutcome.NOOP
                self._notify(self.repository.board_id_for(kind, ref.id))
                return MoveOutcome.REORDER

            if self.repository.read_fields(parent_kind, target_parent_id) is None:
                logger.debug("drop: target %s not found: %d", parent_kind.value, target_parent_id)
                return MoveOutcome.NOOP

            source_board = self.repository.board_id_for(kind, ref.id)
            with self.repository.transaction():
                new_position = self._reparent(
                    kind, ref.id, current.parent_id, target_parent_id, index
                )
            target_board = self.repository.board_id_for(kind, ref.id)
        except StoreError as e:
            logger.warning("Error dropping %s onto %s %d: %s", ref, parent_kind.value, target_parent_id, e)
            return MoveOutcome.FAILED

        logger.info(
            "Dropped %s onto %s %d (position %d)", ref, parent_kind.value, target_parent_id, new_position
        )
        self._notify(source_board, target_board)
        return MoveOutcome.REPARENT

    def _reparent(
        self,
        kind: EntityKind,
        item_id: int,
        source_parent_id: int,
        target_parent_id: int,
        index: int | None = None,
    ) -> int:
        """Compact the source set, then attach the item to the target set.

        Must run inside a transaction. Returns the item's new position.
        """
        source = self.repository.get_children(kind, source_parent_id)
        self._write_positions(
            kind, positions.changed_positions(source, positions.remove(source, item_id))
        )

        max_position = self.repository.max_position(kind, target_parent_id)
        new_position = positions.append_position(max_position)
        self.repository.set_parent(kind, item_id, target_parent_id, new_position)

        if index is not None:
            changes = self._place(kind, item_id, target_parent_id, index)
            new_position = changes.get(item_id, new_position)
        return new_position
