"""Shared plumbing for services that write positions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import EntityKind, LaneboardConfig
from ..repositories import RepositoryProtocol
from . import positions

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)

# Called with the id of a board whose contents changed, after the writes commit
BoardChangedCallback = Callable[[int], None]


class BaseService:
    """Repository access, config lookup and change notification."""

    def __init__(
        self,
        repository: RepositoryProtocol,
        config_service: ConfigService | None = None,
        on_change: BoardChangedCallback | None = None,
    ) -> None:
        self.repository = repository
        self._config_service = config_service
        self._on_change = on_change

    def _get_config(self) -> LaneboardConfig:
        """Get config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_config()
        return LaneboardConfig.default()

    def _notify(self, *board_ids: int | None) -> None:
        """Tell the presentation layer which boards need a reload."""
        if self._on_change is None:
            return
        for board_id in dict.fromkeys(b for b in board_ids if b is not None):
            self._on_change(board_id)

    def _write_positions(self, kind: EntityKind, assignment: dict[int, int]) -> None:
        for item_id, position in assignment.items():
            self.repository.set_position(kind, item_id, position)

    def _compact_children(self, kind: EntityKind, parent_id: int) -> int:
        """Renumber a sibling set to 0..n-1. Returns the number of rows rewritten."""
        siblings = self.repository.get_children(kind, parent_id)
        changes = positions.changed_positions(siblings, positions.compact(siblings))
        self._write_positions(kind, changes)
        if changes:
            logger.debug("Compacted %d %s rows under parent %d", len(changes), kind.value, parent_id)
        return len(changes)

    def _place(self, kind: EntityKind, item_id: int, parent_id: int, target_index: int) -> dict[int, int]:
        """Put item_id at target_index under parent_id and renumber the set.

        The item must already belong to parent_id. Returns the positions written.
        """
        siblings = self.repository.get_children(kind, parent_id)
        reordered = positions.insert_at(siblings, item_id, target_index)
        changes = positions.changed_positions(siblings, reordered)
        self._write_positions(kind, changes)
        return changes
