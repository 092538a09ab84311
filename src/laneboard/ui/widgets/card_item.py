"""Card widget."""

from __future__ import annotations

from textual.widgets import Static

from ...models import Card


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


class CardItem(Static):
    """A card displayed inside a list column."""

    DEFAULT_CSS = """
    CardItem {
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $panel;
    }

    CardItem.selected {
        background: $accent;
        text-style: bold;
    }

    CardItem.marked {
        border-left: thick $warning;
    }
    """

    def __init__(self, card: Card, selected: bool = False, marked: bool = False, **kwargs) -> None:
        super().__init__(self._render_text(card), **kwargs)
        self.card = card
        if selected:
            self.add_class("selected")
        if marked:
            self.add_class("marked")

    @staticmethod
    def _render_text(card: Card) -> str:
        text = _truncate(card.title, 30)
        if card.has_attachment:
            text += " [yellow]📎[/]"
        if card.description.strip():
            first_line = card.description.strip().splitlines()[0]
            text += f"\n[dim]{_truncate(first_line, 30)}[/]"
        return text
