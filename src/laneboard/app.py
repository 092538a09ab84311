"""laneboard TUI application."""

from textual.app import App
from textual.binding import Binding

from .bootstrap import Services, build_services
from .config import Settings
from .models import Direction, EntityKind, ItemRef, MoveOutcome, ViewContext
from .ui.screens.board import BoardScreen
from .ui.widgets import ConfirmModal, InputModal


class LaneboardApp(App):
    """laneboard - terminal kanban with swimlanes."""

    TITLE = "laneboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("b", "next_board", "Board", show=True),
        Binding("tab", "cycle_level", "Level", show=True, priority=True),
        # Navigation - vim style
        Binding("h", "nav(-1, 0)", "← List", show=False),
        Binding("j", "nav(0, 1)", "↓ Down", show=False),
        Binding("k", "nav(0, -1)", "↑ Up", show=False),
        Binding("l", "nav(1, 0)", "→ List", show=False),
        # Navigation - arrow keys
        Binding("left", "nav(-1, 0)", "← List", show=False),
        Binding("down", "nav(0, 1)", "↓ Down", show=False),
        Binding("up", "nav(0, -1)", "↑ Up", show=False),
        Binding("right", "nav(1, 0)", "→ List", show=False),
        # Moves
        Binding("H", "move('left')", "Move ←", show=False),
        Binding("J", "move('down')", "Move ↓", show=False),
        Binding("K", "move('up')", "Move ↑", show=False),
        Binding("L", "move('right')", "Move →", show=False),
        Binding("shift+left", "move('left')", "Move ←", show=False),
        Binding("shift+down", "move('down')", "Move ↓", show=False),
        Binding("shift+up", "move('up')", "Move ↑", show=False),
        Binding("shift+right", "move('right')", "Move →", show=False),
        Binding("g", "reorder_to(0)", "To first", show=False),
        Binding("G", "reorder_to(-1)", "To last", show=False),
        # Item actions
        Binding("n", "new_card", "Card", show=True),
        Binding("a", "new_list", "List", show=True),
        Binding("s", "new_swimlane", "Swimlane", show=True),
        Binding("e", "rename", "Rename", show=True),
        Binding("c", "clone", "Clone", show=True),
        Binding("d", "delete", "Delete", show=True),
        Binding("space", "toggle_mark", "Mark", show=False),
        Binding("escape", "clear_marks", "Unmark", show=False),
    ]

    def __init__(self, settings: Settings | None = None, services: Services | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.view_context = ViewContext()
        self._pending_focus: ItemRef | None = None
        if services is None:
            services = build_services(self.settings, on_change=self._on_board_changed)
        self.services = services

    def on_mount(self) -> None:
        board = self.services.boards.ensure_board()
        if board is None:
            self.exit(return_code=1, message="Could not open the board database")
            return
        self.view_context.active_board_id = board.id
        self.push_screen(BoardScreen())

    def on_unmount(self) -> None:
        self.services.close()

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    def _on_board_changed(self, board_id: int) -> None:
        """Services report committed writes here; redraw if it is our board."""
        if board_id != self.view_context.active_board_id:
            return
        screen = self._board_screen()
        if screen is None:
            return
        focus, self._pending_focus = self._pending_focus, None
        screen.refresh_board(focus=focus)

    def _selected(self) -> ItemRef | None:
        screen = self._board_screen()
        return screen.selected_ref if screen else None

    # --- Board ---

    def action_refresh(self) -> None:
        screen = self._board_screen()
        if screen:
            screen.refresh_board()

    def action_next_board(self) -> None:
        """Switch to the next board, wrapping around."""
        boards = self.services.boards.list_boards()
        if not boards:
            return
        ids = [b.id for b in boards]
        try:
            idx = (ids.index(self.view_context.active_board_id) + 1) % len(ids)
        except ValueError:
            idx = 0
        self.view_context.active_board_id = ids[idx]
        self.view_context.clear_selection()
        screen = self._board_screen()
        if screen:
            screen.refresh_board()
        self.notify(boards[idx].name, timeout=2)

    # --- Navigation ---

    def action_nav(self, dx: int, dy: int) -> None:
        screen = self._board_screen()
        if screen:
            screen.navigate(dx, dy)

    def action_cycle_level(self) -> None:
        screen = self._board_screen()
        if screen:
            level = screen.cycle_level()
            self.notify(f"Targeting {level.value}s", timeout=1)

    # --- Moves ---

    def action_move(self, direction: str) -> None:
        """Move the selected item; swap within its parent or hop parents."""
        ref = self._selected()
        if ref is None:
            return
        try:
            self._pending_focus = ref
            outcome = self.services.moves.move(ref, Direction(direction))
        except ValueError:
            self._pending_focus = None
            self.notify(f"Can't move a {ref.kind.value} {direction}", severity="warning", timeout=2)
            return

        if outcome is MoveOutcome.FAILED:
            self.notify("Move failed", severity="error")
        if not outcome.changed:
            self._pending_focus = None

    def action_reorder_to(self, index: int) -> None:
        """Send the selected item to the first slot, or last for a negative index."""
        ref = self._selected()
        if ref is None:
            return
        if index < 0:
            # Clamped to the last slot
            index = 1 << 30
        self._pending_focus = ref
        if not self.services.reorder.reorder_to(ref, index):
            self._pending_focus = None

    # --- Create ---

    def action_new_card(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.board_tree is None:
            return
        list_id = screen.board_cursor.current_list_id(screen.board_tree)
        if list_id is None:
            self.notify("Add a list first", severity="warning", timeout=2)
            return

        def create(title: str | None) -> None:
            if not title:
                return
            card = self._with_focus(
                lambda: self.services.items.create_card(list_id, title), EntityKind.CARD
            )
            if card is None:
                self.notify("Could not create card", severity="error")

        self.push_screen(InputModal("New card title"), callback=create)

    def action_new_list(self) -> None:
        screen = self._board_screen()
        if screen is None or screen.board_tree is None:
            return
        swimlane_id = screen.board_cursor.current_swimlane_id(screen.board_tree)
        if swimlane_id is None:
            self.notify("Add a swimlane first", severity="warning", timeout=2)
            return

        def create(name: str | None) -> None:
            if not name:
                return
            board_list = self._with_focus(
                lambda: self.services.items.create_list(swimlane_id, name), EntityKind.LIST
            )
            if board_list is None:
                self.notify("Could not create list", severity="error")

        self.push_screen(InputModal("New list name"), callback=create)

    def action_new_swimlane(self) -> None:
        board_id = self.view_context.active_board_id
        if board_id is None:
            return

        def create(name: str | None) -> None:
            if not name:
                return
            swimlane = self._with_focus(
                lambda: self.services.items.create_swimlane(board_id, name), EntityKind.SWIMLANE
            )
            if swimlane is None:
                self.notify("Could not create swimlane", severity="error")

        self.push_screen(InputModal("New swimlane name"), callback=create)

    def _with_focus(self, create, kind: EntityKind):
        """Run a create call so the redraw it triggers lands on the new item.

        The id is unknown until the insert happens, so the refresh requested
        by the service is repeated once the id is known.
        """
        item = create()
        if item is not None:
            screen = self._board_screen()
            if screen:
                screen.refresh_board(focus=ItemRef(kind=kind, id=item.id))
        return item

    # --- Edit ---

    def action_rename(self) -> None:
        ref = self._selected()
        if ref is None:
            return
        item = self.services.items.get(ref)
        if item is None:
            return
        current = getattr(item, ref.kind.label_field)

        def rename(name: str | None) -> None:
            if not name or name == current:
                return
            self._pending_focus = ref
            if not self.services.items.rename(ref, name):
                self._pending_focus = None
                self.notify("Rename failed", severity="error")

        self.push_screen(InputModal(f"Rename {ref.kind.value}", value=current), callback=rename)

    def action_clone(self) -> None:
        ref = self._selected()
        if ref is None:
            return
        copy = self.services.clones.clone(ref)
        if copy is None:
            self.notify("Clone failed", severity="error")
            return
        screen = self._board_screen()
        if screen:
            screen.refresh_board(focus=copy)
        self.notify(f"Cloned {ref.kind.value}", timeout=2)

    def action_delete(self) -> None:
        """Delete the marked items, or the selected one, after confirmation."""
        # Children before parents, so a cascade never removes a later target
        targets = [
            ref
            for kind in (EntityKind.CARD, EntityKind.LIST, EntityKind.SWIMLANE)
            for ref in self.view_context.selected_of_kind(kind)
        ]
        if not targets:
            ref = self._selected()
            if ref is None:
                return
            targets = [ref]

        if len(targets) == 1:
            item = self.services.items.get(targets[0])
            label = getattr(item, targets[0].kind.label_field) if item else str(targets[0])
            message = f"Delete {targets[0].kind.value} '{label}'?"
        else:
            message = f"Delete {len(targets)} marked items?"

        def confirmed(ok: bool | None) -> None:
            if not ok:
                return
            deleted = 0
            for ref in targets:
                if self.services.items.delete(ref):
                    deleted += 1
                    self.view_context.deselect(ref)
            screen = self._board_screen()
            if screen:
                screen.apply_marks()
            if deleted < len(targets):
                # Items that failed stay marked
                self.notify(
                    f"Deleted {deleted} of {len(targets)} item(s)", severity="error", timeout=3
                )
            else:
                self.notify(f"Deleted {deleted} item(s)", timeout=2)

        self.push_screen(
            ConfirmModal(message, detail="Everything inside it is deleted too."),
            callback=confirmed,
        )

    # --- Marks ---

    def action_toggle_mark(self) -> None:
        ref = self._selected()
        if ref is None:
            return
        self.view_context.toggle(ref)
        screen = self._board_screen()
        if screen:
            screen.apply_marks()

    def action_clear_marks(self) -> None:
        self.view_context.clear_selection()
        screen = self._board_screen()
        if screen:
            screen.apply_marks()


def run(settings: Settings | None = None) -> None:
    """Run the laneboard application."""
    app = LaneboardApp(settings)
    app.run()
