"""Repository layer for data access."""

from .errors import StoreError, StoreIntegrityError
from .protocol import RepositoryProtocol
from .sqlite import SqliteRepository

__all__ = [
    "RepositoryProtocol",
    "SqliteRepository",
    "StoreError",
    "StoreIntegrityError",
]
