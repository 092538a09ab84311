"""Swimlane widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from ...models import ItemRef, SwimlaneNode
from .list_column import ListColumn


class SwimlaneRow(Vertical):
    """A swimlane: a header above a horizontal row of list columns."""

    DEFAULT_CSS = """
    SwimlaneRow {
        height: auto;
        margin-bottom: 1;
        border-top: solid $primary;
    }

    SwimlaneRow.selected {
        border-top: thick $accent;
    }

    SwimlaneRow .swimlane-header {
        text-style: bold;
        color: $primary;
    }

    SwimlaneRow .swimlane-lists {
        height: auto;
    }
    """

    def __init__(
        self,
        node: SwimlaneNode,
        selected: ItemRef | None = None,
        marked: set[ItemRef] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.swimlane_node = node
        self._selected = selected
        self._marked = marked or set()
        if selected == ItemRef.swimlane(node.swimlane.id):
            self.add_class("selected")

    def compose(self) -> ComposeResult:
        yield Static(self.swimlane_node.swimlane.name, classes="swimlane-header")
        with Horizontal(classes="swimlane-lists"):
            if not self.swimlane_node.lists:
                yield Static("[dim]No lists[/]")
            for list_node in self.swimlane_node.lists:
                yield ListColumn(
                    list_node,
                    selected=self._selected,
                    marked=self._marked,
                    id=f"list-{list_node.board_list.id}",
                )
