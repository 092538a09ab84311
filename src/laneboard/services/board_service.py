"""Service for reading whole boards."""

from __future__ import annotations

import logging

from ..models import Board, BoardTree, EntityKind, ListNode, SwimlaneNode
from ..repositories import StoreError
from . import positions
from .base import BaseService

logger = logging.getLogger(__name__)


class BoardService(BaseService):
    """Service for board listing, tree loading and position audits."""

    def list_boards(self) -> list[Board]:
        """All boards, ordered by name."""
        try:
            return self.repository.list_boards()
        except StoreError as e:
            logger.warning("Error listing boards: %s", e)
            return []

    def get_board(self, board_id: int) -> Board | None:
        return self.repository.get_board(board_id)

    def ensure_board(self) -> Board | None:
        """Return the first board, creating the default board if there are none.

        Returns None if the store cannot be read or written.
        """
        try:
            boards = self.repository.list_boards()
            if boards:
                return boards[0]
            name = self._get_config().default_board_name
            board_id = self.repository.create_board(name)
            board = self.repository.get_board(board_id)
        except StoreError as e:
            logger.warning("Error opening default board: %s", e)
            return None

        if board is None:
            logger.warning("Default board %d missing after create", board_id)
            return None
        logger.info("Created default board: %d (%s)", board_id, name)
        return board

    def load_board(self, board_id: int) -> BoardTree | None:
        """Load a board with every swimlane, list and card in position order."""
        board = self.repository.get_board(board_id)
        if board is None:
            logger.debug("load_board: board not found: %d", board_id)
            return None

        swimlane_nodes = []
        for swimlane in self.repository.get_swimlanes(board_id):
            list_nodes = [
                ListNode(board_list=board_list, cards=self.repository.get_cards(board_list.id))
                for board_list in self.repository.get_lists(swimlane.id)
            ]
            swimlane_nodes.append(SwimlaneNode(swimlane=swimlane, lists=list_nodes))

        return BoardTree(board=board, swimlanes=swimlane_nodes)

    def find_density_violations(self, board_id: int) -> list[str]:
        """
        Check every sibling set on a board for gaps or duplicate positions.

        Returns:
            One description per offending sibling set; empty when the board is dense.
        """
        violations: list[str] = []
        tree = self.load_board(board_id)
        if tree is None:
            return violations

        def check(label: str, values: list[int]) -> None:
            if not positions.is_dense(values):
                violations.append(f"{label}: positions {sorted(values)}")

        check(f"board {board_id} swimlanes", [s.swimlane.position for s in tree.swimlanes])
        for sn in tree.swimlanes:
            check(
                f"swimlane {sn.swimlane.id} lists",
                [ln.board_list.position for ln in sn.lists],
            )
            for ln in sn.lists:
                check(f"list {ln.board_list.id} cards", [c.position for c in ln.cards])
        return violations

    def compact_board(self, board_id: int) -> int:
        """
        Renumber every sibling set on a board to 0..n-1.

        Repairs boards damaged outside this service layer. Returns the number
        of rows rewritten.
        """
        tree = self.load_board(board_id)
        if tree is None:
            return 0

        rewritten = 0
        try:
            with self.repository.transaction():
                rewritten += self._compact_children(EntityKind.SWIMLANE, board_id)
                for sn in tree.swimlanes:
                    rewritten += self._compact_children(EntityKind.LIST, sn.swimlane.id)
                    for ln in sn.lists:
                        rewritten += self._compact_children(EntityKind.CARD, ln.board_list.id)
        except StoreError as e:
            logger.warning("Error compacting board %d: %s", board_id, e)
            return 0

        if rewritten:
            logger.info("Compacted board %d: %d rows renumbered", board_id, rewritten)
            self._notify(board_id)
        return rewritten
