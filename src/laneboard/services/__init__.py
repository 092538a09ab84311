"""Service layer for business logic."""

from .base import BoardChangedCallback
from .board_service import BoardService
from .clone_service import CloneService
from .config_service import ConfigService
from .export_service import ExportRow, ExportService
from .item_service import ItemService
from .move_service import MoveService
from .reorder_service import ReorderService

__all__ = [
    "BoardChangedCallback",
    "BoardService",
    "CloneService",
    "ConfigService",
    "ExportRow",
    "ExportService",
    "ItemService",
    "MoveService",
    "ReorderService",
]
