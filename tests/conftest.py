"""Shared fixtures: an in-memory store and a change recorder."""

import pytest

from laneboard.repositories import SqliteRepository, StoreError


@pytest.fixture
def repo() -> SqliteRepository:
    """In-memory repository, closed after the test."""
    repository = SqliteRepository(":memory:")
    yield repository
    repository.close()


@pytest.fixture
def changes() -> list[int]:
    """Board ids reported through on_change, in call order."""
    return []


@pytest.fixture
def fail_on_call(monkeypatch):
    """Patch obj.name so its nth call raises StoreError; earlier calls go through."""

    def install(obj, name: str, nth: int) -> None:
        original = getattr(obj, name)
        calls = 0

        def wrapper(*args, **kwargs):
            nonlocal calls
            calls += 1
            if calls == nth:
                raise StoreError("database is locked")
            return original(*args, **kwargs)

        monkeypatch.setattr(obj, name, wrapper)

    return install
