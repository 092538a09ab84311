"""Wiring of repository and services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import Settings
from .repositories import RepositoryProtocol, SqliteRepository
from .services import (
    BoardChangedCallback,
    BoardService,
    CloneService,
    ConfigService,
    ExportService,
    ItemService,
    MoveService,
    ReorderService,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Repository plus every service built on it, sharing one connection."""

    config_service: ConfigService
    repository: RepositoryProtocol
    boards: BoardService
    items: ItemService
    moves: MoveService
    reorder: ReorderService
    clones: CloneService
    export: ExportService

    def close(self) -> None:
        self.repository.close()


def resolve_database(settings: Settings, config_service: ConfigService) -> Path | str:
    """Database from settings if given, otherwise from laneboard.yml."""
    if settings.database is not None:
        return settings.database
    return config_service.database_path


def build_services(
    settings: Settings,
    on_change: BoardChangedCallback | None = None,
    repository: RepositoryProtocol | None = None,
) -> Services:
    """Open the store and construct services.

    Args:
        settings: Application settings
        on_change: Called with a board id after each committed mutation
        repository: Use this store instead of opening the configured database
    """
    config_service = ConfigService(settings.project_root)
    config_service.get_config()
    if config_service.has_config_error:
        logger.warning("Using default configuration: %s", config_service.config_error)

    if repository is None:
        database = resolve_database(settings, config_service)
        repository = SqliteRepository(database)

    def make(cls):
        return cls(repository, config_service, on_change)

    return Services(
        config_service=config_service,
        repository=repository,
        boards=make(BoardService),
        items=make(ItemService),
        moves=make(MoveService),
        reorder=make(ReorderService),
        clones=make(CloneService),
        export=make(ExportService),
    )
