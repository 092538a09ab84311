"""Exceptions raised by repository implementations."""


class StoreError(Exception):
    """Base exception for storage failures."""

    pass


class StoreIntegrityError(StoreError):
    """A write violated a constraint (foreign key, not null)."""

    pass
