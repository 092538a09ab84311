"""Widget components."""

from .card_item import CardItem
from .confirm_modal import ConfirmModal
from .input_modal import InputModal
from .list_column import EmptyListMessage, ListColumn
from .swimlane_row import SwimlaneRow

__all__ = [
    "CardItem",
    "ConfirmModal",
    "EmptyListMessage",
    "InputModal",
    "ListColumn",
    "SwimlaneRow",
]
