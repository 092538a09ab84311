"""UI components."""

from .cursor import BoardCursor
from .screens.board import BoardScreen

__all__ = [
    "BoardCursor",
    "BoardScreen",
]
