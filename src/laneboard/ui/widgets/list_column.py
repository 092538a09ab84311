"""List column widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ...models import ItemRef, ListNode
from .card_item import CardItem


class EmptyListMessage(Static):
    """Displayed when a list has no cards."""

    pass


class ListColumn(Vertical):
    """A list of cards, shown as one column inside a swimlane."""

    DEFAULT_CSS = """
    ListColumn {
        width: 32;
        height: auto;
        margin-right: 1;
        border: round $primary-darken-2;
    }

    ListColumn.selected {
        border: round $accent;
    }

    ListColumn .list-header {
        text-style: bold;
        padding: 0 1;
        margin-bottom: 1;
    }

    ListColumn EmptyListMessage {
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        node: ListNode,
        selected: ItemRef | None = None,
        marked: set[ItemRef] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.list_node = node
        self._selected = selected
        self._marked = marked or set()
        if selected == ItemRef.board_list(node.board_list.id):
            self.add_class("selected")

    def compose(self) -> ComposeResult:
        count = len(self.list_node.cards)
        yield Static(f"{self.list_node.board_list.name} [dim]({count})[/]", classes="list-header")
        if not self.list_node.cards:
            yield EmptyListMessage("No cards")
            return
        for card in self.list_node.cards:
            ref = ItemRef.card(card.id)
            yield CardItem(
                card,
                selected=ref == self._selected,
                marked=ref in self._marked,
                id=f"card-{card.id}",
            )
