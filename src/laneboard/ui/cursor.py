"""Cursor over a loaded board tree."""

from __future__ import annotations

from ..models import BoardTree, EntityKind, ItemRef

# Levels the cursor can target, cycled in this order
LEVELS = (EntityKind.CARD, EntityKind.LIST, EntityKind.SWIMLANE)


class BoardCursor:
    """
    Index-based cursor: (swimlane, list, card) plus the level being targeted.

    Indices are always clamped against the current tree, so the cursor
    survives reloads that add or remove items.
    """

    def __init__(self) -> None:
        self.swimlane = 0
        self.list = 0
        self.card = 0
        self.level = EntityKind.CARD

    def cycle_level(self) -> EntityKind:
        """Switch between targeting cards, lists and swimlanes."""
        idx = LEVELS.index(self.level)
        self.level = LEVELS[(idx + 1) % len(LEVELS)]
        return self.level

    def clamp(self, tree: BoardTree) -> None:
        """Pull indices back into range for the given tree."""
        if not tree.swimlanes:
            self.swimlane = self.list = self.card = 0
            return
        self.swimlane = max(0, min(self.swimlane, len(tree.swimlanes) - 1))
        lists = tree.swimlanes[self.swimlane].lists
        if not lists:
            self.list = self.card = 0
            return
        self.list = max(0, min(self.list, len(lists) - 1))
        cards = lists[self.list].cards
        self.card = max(0, min(self.card, len(cards) - 1)) if cards else 0

    def selected(self, tree: BoardTree) -> ItemRef | None:
        """The item the cursor points at on its current level, if any."""
        self.clamp(tree)
        if not tree.swimlanes:
            return None
        sn = tree.swimlanes[self.swimlane]
        if self.level is EntityKind.SWIMLANE:
            return ItemRef.swimlane(sn.swimlane.id)
        if not sn.lists:
            return None
        ln = sn.lists[self.list]
        if self.level is EntityKind.LIST:
            return ItemRef.board_list(ln.board_list.id)
        if not ln.cards:
            return None
        return ItemRef.card(ln.cards[self.card].id)

    def current_list_id(self, tree: BoardTree) -> int | None:
        self.clamp(tree)
        if not tree.swimlanes or not tree.swimlanes[self.swimlane].lists:
            return None
        return tree.swimlanes[self.swimlane].lists[self.list].board_list.id

    def current_swimlane_id(self, tree: BoardTree) -> int | None:
        self.clamp(tree)
        if not tree.swimlanes:
            return None
        return tree.swimlanes[self.swimlane].swimlane.id

    def step_horizontal(self, tree: BoardTree, delta: int) -> None:
        """Move between lists of the current swimlane."""
        self.clamp(tree)
        if self.level is EntityKind.SWIMLANE:
            return
        self.list += delta
        self.clamp(tree)

    def step_vertical(self, tree: BoardTree, delta: int) -> None:
        """Move between cards, spilling over into the neighboring swimlane."""
        self.clamp(tree)
        if not tree.swimlanes:
            return
        if self.level is EntityKind.CARD:
            lists = tree.swimlanes[self.swimlane].lists
            count = len(lists[self.list].cards) if lists else 0
            target = self.card + delta
            if 0 <= target < count:
                self.card = target
                return
        new_swimlane = self.swimlane + delta
        if not 0 <= new_swimlane < len(tree.swimlanes):
            return
        self.swimlane = new_swimlane
        # Entering from above lands on the first card, from below on the last
        self.card = 0
        self.clamp(tree)
        if delta < 0 and self.level is EntityKind.CARD:
            lists = tree.swimlanes[self.swimlane].lists
            if lists:
                self.card = max(0, len(lists[self.list].cards) - 1)

    def focus(self, tree: BoardTree, ref: ItemRef) -> bool:
        """Point the cursor at ref; returns False if ref is not on the board."""
        if ref.kind is EntityKind.CARD:
            found = tree.find_card(ref.id)
            if found is None:
                return False
            self.swimlane, self.list, self.card = found
        elif ref.kind is EntityKind.LIST:
            found_list = tree.find_list(ref.id)
            if found_list is None:
                return False
            self.swimlane, self.list = found_list
            self.card = 0
        elif ref.kind is EntityKind.SWIMLANE:
            found_lane = tree.find_swimlane(ref.id)
            if found_lane is None:
                return False
            self.swimlane = found_lane
        else:
            return False
        self.level = ref.kind
        return True
