"""Utility functions."""

from .datetime import from_iso, now_utc, to_iso
from .slug import ordered_dirname, ordered_filename, slugify

__all__ = [
    "from_iso",
    "now_utc",
    "ordered_dirname",
    "ordered_filename",
    "slugify",
    "to_iso",
]
