"""SQLite-backed repository for boards, swimlanes, lists and cards."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from ..models import Board, BoardList, Card, EntityKind, ParentRef, SiblingRef, Swimlane
from ..utils import from_iso, to_iso
from .errors import StoreError, StoreIntegrityError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS boards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS swimlanes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    board_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (board_id) REFERENCES boards(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS lists (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    swimlane_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (swimlane_id) REFERENCES swimlanes(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    list_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    position INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    attachment BLOB,
    FOREIGN KEY (list_id) REFERENCES lists(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_swimlanes_board ON swimlanes(board_id, position);
CREATE INDEX IF NOT EXISTS idx_lists_swimlane ON lists(swimlane_id, position);
CREATE INDEX IF NOT EXISTS idx_cards_list ON cards(list_id, position);
"""

# Columns callers may write through create_child / update_fields, per kind
WRITABLE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.BOARD: ("name", "description"),
    EntityKind.SWIMLANE: ("name",),
    EntityKind.LIST: ("name",),
    EntityKind.CARD: ("title", "description", "created_at", "attachment"),
}


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection in autocommit mode with FK enforcement."""
    conn = sqlite3.connect(db_path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _require_positioned(kind: EntityKind) -> str:
    """Return the parent column for a positioned kind."""
    column = kind.parent_column
    if column is None:
        raise ValueError(f"{kind.value} rows are not positioned")
    return column


class SqliteRepository:
    """
    Repository backed by a single SQLite database file.

    One connection is opened at construction and held until close().
    Statements autocommit unless issued inside transaction().
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        """
        Open the database and create tables if needed.

        Args:
            db_path: Database file, or ":memory:" for a throwaway store
        """
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = _connect(self.db_path)
            self._conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.db_path}: {e}") from e
        self._depth = 0
        logger.debug("Opened database %s", self.db_path)

    # --- Low-level helpers ---

    def _execute(self, sql: str, params: tuple | list = ()) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, params)
        except sqlite3.IntegrityError as e:
            raise StoreIntegrityError(str(e)) from e
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _fetchone(self, sql: str, params: tuple | list = ()) -> sqlite3.Row | None:
        return self._execute(sql, params).fetchone()

    def _fetchall(self, sql: str, params: tuple | list = ()) -> list[sqlite3.Row]:
        return self._execute(sql, params).fetchall()

    @staticmethod
    def _filter_fields(kind: EntityKind, fields: dict[str, Any]) -> dict[str, Any]:
        allowed = WRITABLE_FIELDS[kind]
        unknown = set(fields) - set(allowed)
        if unknown:
            raise ValueError(f"Unknown {kind.value} fields: {sorted(unknown)}")
        data = dict(fields)
        if isinstance(data.get("created_at"), datetime):
            data["created_at"] = to_iso(data["created_at"])
        return data

    # --- Ordering queries ---

    def get_children(self, kind: EntityKind, parent_id: int) -> list[SiblingRef]:
        """Get (id, position) pairs under a parent, ascending by position."""
        column = _require_positioned(kind)
        rows = self._fetchall(
            f"SELECT id, position FROM {kind.table} WHERE {column} = ? ORDER BY position, id",
            (parent_id,),
        )
        return [SiblingRef(id=row["id"], position=row["position"]) for row in rows]

    def get_parent(self, kind: EntityKind, item_id: int) -> ParentRef | None:
        column = _require_positioned(kind)
        row = self._fetchone(
            f"SELECT {column} AS parent_id, position FROM {kind.table} WHERE id = ?",
            (item_id,),
        )
        if row is None:
            return None
        return ParentRef(parent_id=row["parent_id"], position=row["position"])

    def find_at_position(self, kind: EntityKind, parent_id: int, position: int) -> int | None:
        column = _require_positioned(kind)
        row = self._fetchone(
            f"SELECT id FROM {kind.table} WHERE {column} = ? AND position = ? ORDER BY id LIMIT 1",
            (parent_id, position),
        )
        return row["id"] if row else None

    def max_position(self, kind: EntityKind, parent_id: int) -> int | None:
        column = _require_positioned(kind)
        row = self._fetchone(
            f"SELECT MAX(position) AS max_pos FROM {kind.table} WHERE {column} = ?",
            (parent_id,),
        )
        return row["max_pos"] if row else None

    # --- Position writes ---

    def set_position(self, kind: EntityKind, item_id: int, position: int) -> None:
        _require_positioned(kind)
        self._execute(f"UPDATE {kind.table} SET position = ? WHERE id = ?", (position, item_id))

    def set_parent(self, kind: EntityKind, item_id: int, parent_id: int, position: int) -> None:
        column = _require_positioned(kind)
        self._execute(
            f"UPDATE {kind.table} SET {column} = ?, position = ? WHERE id = ?",
            (parent_id, position, item_id),
        )

    def shift_positions(
        self, kind: EntityKind, parent_id: int, after_position: int, delta: int
    ) -> None:
        column = _require_positioned(kind)
        self._execute(
            f"UPDATE {kind.table} SET position = position + ? "
            f"WHERE {column} = ? AND position > ?",
            (delta, parent_id, after_position),
        )

    # --- Row CRUD ---

    def create_board(self, name: str, description: str = "") -> int:
        cursor = self._execute(
            "INSERT INTO boards (name, description) VALUES (?, ?)", (name, description)
        )
        return int(cursor.lastrowid)

    def create_child(
        self, kind: EntityKind, parent_id: int, position: int, fields: dict[str, Any]
    ) -> int:
        column = _require_positioned(kind)
        data = self._filter_fields(kind, fields)
        names = [column, "position", *data.keys()]
        placeholders = ", ".join("?" for _ in names)
        cursor = self._execute(
            f"INSERT INTO {kind.table} ({', '.join(names)}) VALUES ({placeholders})",
            (parent_id, position, *data.values()),
        )
        return int(cursor.lastrowid)

    def read_fields(self, kind: EntityKind, item_id: int) -> dict[str, Any] | None:
        columns = ", ".join(WRITABLE_FIELDS[kind])
        row = self._fetchone(f"SELECT {columns} FROM {kind.table} WHERE id = ?", (item_id,))
        if row is None:
            return None
        data = dict(row)
        if "created_at" in data:
            data["created_at"] = from_iso(data["created_at"])
        return data

    def update_fields(self, kind: EntityKind, item_id: int, fields: dict[str, Any]) -> None:
        data = self._filter_fields(kind, fields)
        if not data:
            return
        assignments = ", ".join(f"{name} = ?" for name in data)
        self._execute(
            f"UPDATE {kind.table} SET {assignments} WHERE id = ?", (*data.values(), item_id)
        )

    def delete(self, kind: EntityKind, item_id: int) -> None:
        self._execute(f"DELETE FROM {kind.table} WHERE id = ?", (item_id,))

    # --- Typed reads ---

    def get_board(self, board_id: int) -> Board | None:
        row = self._fetchone(
            "SELECT id, name, description, created_at FROM boards WHERE id = ?", (board_id,)
        )
        return self._board_from_row(row) if row else None

    def list_boards(self) -> list[Board]:
        rows = self._fetchall(
            "SELECT id, name, description, created_at FROM boards ORDER BY name, id"
        )
        return [self._board_from_row(row) for row in rows]

    def get_swimlane(self, swimlane_id: int) -> Swimlane | None:
        row = self._fetchone(
            "SELECT id, board_id, name, position FROM swimlanes WHERE id = ?", (swimlane_id,)
        )
        return Swimlane(**dict(row)) if row else None

    def get_list(self, list_id: int) -> BoardList | None:
        row = self._fetchone(
            "SELECT id, swimlane_id, name, position FROM lists WHERE id = ?", (list_id,)
        )
        return BoardList(**dict(row)) if row else None

    def get_card(self, card_id: int) -> Card | None:
        row = self._fetchone(
            "SELECT id, list_id, title, description, position, created_at, attachment "
            "FROM cards WHERE id = ?",
            (card_id,),
        )
        return self._card_from_row(row) if row else None

    def get_swimlanes(self, board_id: int) -> list[Swimlane]:
        rows = self._fetchall(
            "SELECT id, board_id, name, position FROM swimlanes "
            "WHERE board_id = ? ORDER BY position, id",
            (board_id,),
        )
        return [Swimlane(**dict(row)) for row in rows]

    def get_lists(self, swimlane_id: int) -> list[BoardList]:
        rows = self._fetchall(
            "SELECT id, swimlane_id, name, position FROM lists "
            "WHERE swimlane_id = ? ORDER BY position, id",
            (swimlane_id,),
        )
        return [BoardList(**dict(row)) for row in rows]

    def get_cards(self, list_id: int) -> list[Card]:
        rows = self._fetchall(
            "SELECT id, list_id, title, description, position, created_at, attachment "
            "FROM cards WHERE list_id = ? ORDER BY position, id",
            (list_id,),
        )
        return [self._card_from_row(row) for row in rows]

    def board_id_for(self, kind: EntityKind, item_id: int) -> int | None:
        queries = {
            EntityKind.BOARD: "SELECT id FROM boards WHERE id = ?",
            EntityKind.SWIMLANE: "SELECT board_id AS id FROM swimlanes WHERE id = ?",
            EntityKind.LIST: (
                "SELECT s.board_id AS id FROM lists l "
                "JOIN swimlanes s ON l.swimlane_id = s.id WHERE l.id = ?"
            ),
            EntityKind.CARD: (
                "SELECT s.board_id AS id FROM cards c "
                "JOIN lists l ON c.list_id = l.id "
                "JOIN swimlanes s ON l.swimlane_id = s.id WHERE c.id = ?"
            ),
        }
        row = self._fetchone(queries[kind], (item_id,))
        return row["id"] if row else None

    # --- Lifecycle ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed writes as one unit of work.

        Nested calls join the outermost transaction; only the outermost
        commits or rolls back.
        """
        if self._depth > 0:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        self._execute("BEGIN")
        self._depth = 1
        try:
            yield
        except BaseException:
            self._depth = 0
            self._rollback()
            raise
        self._depth = 0
        try:
            self._execute("COMMIT")
        except StoreError:
            self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self._conn.execute("ROLLBACK")
            logger.debug("Transaction rolled back")
        except sqlite3.Error as e:
            # No transaction active (SQLite already rolled back on error)
            logger.debug("Rollback skipped: %s", e)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
        logger.debug("Closed database %s", self.db_path)

    # --- Row mapping ---

    @staticmethod
    def _board_from_row(row: sqlite3.Row) -> Board:
        return Board(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            created_at=from_iso(row["created_at"]),
        )

    @staticmethod
    def _card_from_row(row: sqlite3.Row) -> Card:
        return Card(
            id=row["id"],
            list_id=row["list_id"],
            title=row["title"],
            description=row["description"] or "",
            position=row["position"],
            created_at=from_iso(row["created_at"]),
            attachment=row["attachment"],
        )
