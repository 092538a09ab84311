"""Main board screen."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...models import BoardTree, EntityKind, ItemRef
from ..cursor import BoardCursor
from ..widgets import CardItem, ListColumn, SwimlaneRow


def widget_id(ref: ItemRef) -> str:
    """DOM id of the widget showing ref."""
    prefix = {
        EntityKind.SWIMLANE: "swimlane",
        EntityKind.LIST: "list",
        EntityKind.CARD: "card",
    }[ref.kind]
    return f"{prefix}-{ref.id}"


class BoardScroll(VerticalScroll, can_focus=False):
    """Scrolls the board; keys go to the app bindings instead."""


class BoardScreen(Screen):
    """One board: swimlanes stacked vertically, lists side by side."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.board_cursor = BoardCursor()
        self.board_tree: BoardTree | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield BoardScroll(id="board")
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_board()

    @property
    def selected_ref(self) -> ItemRef | None:
        """Item under the cursor at the current level."""
        if self.board_tree is None:
            return None
        return self.board_cursor.selected(self.board_tree)

    def refresh_board(self, focus: ItemRef | None = None) -> None:
        """
        Reload the active board and redraw it.

        Args:
            focus: If provided, move the cursor to this item after reloading.
                   Otherwise the cursor keeps its indices, clamped to the new tree.
        """
        view = self.app.view_context  # pyrefly: ignore[missing-attribute]
        services = self.app.services  # pyrefly: ignore[missing-attribute]
        if view.active_board_id is None:
            self.board_tree = None
        else:
            self.board_tree = services.boards.load_board(view.active_board_id)

        if self.board_tree is not None:
            if focus is None or not self.board_cursor.focus(self.board_tree, focus):
                self.board_cursor.clamp(self.board_tree)
            self.title = self.board_tree.board.name

        self.call_later(self._rebuild)

    async def _rebuild(self) -> None:
        """Replace board widgets with ones built from the current tree."""
        container = self.query_one("#board", BoardScroll)
        await container.remove_children()

        if self.board_tree is None:
            await container.mount(Static("[dim]No board[/]"))
        elif not self.board_tree.swimlanes:
            await container.mount(Static("[dim]No swimlanes. Press s to add one.[/]"))
        else:
            selected = self.selected_ref
            marked = set(self.app.view_context.selection)  # pyrefly: ignore[missing-attribute]
            await container.mount_all(
                SwimlaneRow(node, selected=selected, marked=marked, id=f"swimlane-{node.swimlane.id}")
                for node in self.board_tree.swimlanes
            )
        self._update_status()
        self._scroll_to_selected()

    # --- Cursor ---

    def navigate(self, dx: int = 0, dy: int = 0) -> None:
        """Move the cursor and update highlighting without reloading."""
        if self.board_tree is None:
            return
        if dx:
            self.board_cursor.step_horizontal(self.board_tree, dx)
        if dy:
            self.board_cursor.step_vertical(self.board_tree, dy)
        self._apply_highlight()

    def cycle_level(self) -> EntityKind:
        level = self.board_cursor.cycle_level()
        self._apply_highlight()
        return level

    def _apply_highlight(self) -> None:
        for widget in self.query(".selected"):
            widget.remove_class("selected")
        ref = self.selected_ref
        if ref is not None:
            for widget in self.query(f"#{widget_id(ref)}"):
                widget.add_class("selected")
        self._update_status()
        self._scroll_to_selected()

    def apply_marks(self) -> None:
        """Sync the marked style with the view's multi-selection."""
        marked = self.app.view_context.selection  # pyrefly: ignore[missing-attribute]
        for item in self.query(CardItem):
            item.set_class(ItemRef.card(item.card.id) in marked, "marked")
        for column in self.query(ListColumn):
            column.set_class(ItemRef.board_list(column.list_node.board_list.id) in marked, "marked")
        for row in self.query(SwimlaneRow):
            row.set_class(ItemRef.swimlane(row.swimlane_node.swimlane.id) in marked, "marked")
        self._update_status()

    def _scroll_to_selected(self) -> None:
        ref = self.selected_ref
        if ref is None:
            return
        for widget in self.query(f"#{widget_id(ref)}"):
            widget.scroll_visible(animate=False)

    def _update_status(self) -> None:
        try:
            status = self.query_one("#status", Static)
        except Exception:
            return
        level = self.board_cursor.level.value
        marked = len(self.app.view_context.selection)  # pyrefly: ignore[missing-attribute]
        text = f"[b]{level}[/b] level"
        if self.board_tree is not None:
            text += f" [dim]|[/] {self.board_tree.card_count} cards"
        if marked:
            text += f" [dim]|[/] {marked} marked"
        status.update(text)
