"""Configuration models for laneboard.yml."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .entities import COPY_SUFFIX


class LaneboardConfig(BaseModel):
    """Root configuration from laneboard.yml."""

    version: int = 1
    database: str = Field(
        default="laneboard.db",
        description="SQLite database path, relative to the project root",
    )
    copy_suffix: str = Field(
        default=COPY_SUFFIX,
        description="Suffix appended to the name of cloned boards, swimlanes, lists and cards",
    )
    compact_after_clone: bool = Field(
        default=True,
        description="Renumber a cloned container's children to 0..n-1 after copying them",
    )
    default_board_name: str = Field(default="My Board", min_length=1)

    @field_validator("database")
    @classmethod
    def validate_database(cls, v: str) -> str:
        """Validate database path is a relative path or :memory:."""
        if not v:
            raise ValueError("database cannot be empty")
        if v == ":memory:":
            return v
        if Path(v).is_absolute():
            raise ValueError("database must be a relative path")
        return v

    @field_validator("copy_suffix")
    @classmethod
    def validate_copy_suffix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("copy_suffix cannot be blank")
        return v

    @classmethod
    def default(cls) -> "LaneboardConfig":
        """Return default configuration."""
        return cls()
