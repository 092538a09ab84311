"""Utilities for generating filesystem-safe slugs."""

import re
import unicodedata


def slugify(text: str) -> str:
    """
    Convert text to a filesystem-safe slug.

    Example: "Fix Login Bug!" -> "fix-login-bug"
    """
    # Normalize unicode characters
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()

    # Replace spaces and underscores with hyphens
    text = re.sub(r"[\s_]+", "-", text)

    # Remove any character that isn't alphanumeric or hyphen
    text = re.sub(r"[^a-z0-9\-]", "", text)

    # Collapse multiple hyphens and strip the ends
    text = re.sub(r"-+", "-", text).strip("-")

    return text


def ordered_filename(position: int, title: str, width: int = 3) -> str:
    """Build a .md filename that sorts by position.

    Example: (2, "Fix Login Bug") -> "002-fix-login-bug.md"
    """
    slug = slugify(title) or "untitled"
    return f"{position:0{width}d}-{slug}.md"


def ordered_dirname(position: int, name: str, width: int = 2) -> str:
    """Build a directory name that sorts by position."""
    slug = slugify(name) or "untitled"
    return f"{position:0{width}d}-{slug}"
