"""Data models."""

from .entities import (
    COPY_SUFFIX,
    Board,
    BoardList,
    Card,
    ItemRef,
    ParentRef,
    SiblingRef,
    Swimlane,
    ViewContext,
)
from .enums import Direction, EntityKind, MoveOutcome
from .laneboard_config import LaneboardConfig
from .tree import BoardTree, ListNode, SwimlaneNode

__all__ = [
    "COPY_SUFFIX",
    "Board",
    "BoardList",
    "BoardTree",
    "Card",
    "Direction",
    "EntityKind",
    "ItemRef",
    "LaneboardConfig",
    "ListNode",
    "MoveOutcome",
    "ParentRef",
    "SiblingRef",
    "Swimlane",
    "SwimlaneNode",
    "ViewContext",
]
