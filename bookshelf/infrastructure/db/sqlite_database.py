"""
SQLite database handle shared by the repositories and the unit of work.

Owns the database file, the schema, and the connection settings. Each unit
of work opens its own connection, so a connection is never shared between
request threads.
"""

import logging
import sqlite3
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from bookshelf.domain.value_objects import PageRequest

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS authors (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    deleted INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    pages_number INTEGER NOT NULL CHECK (pages_number > 0),
    author_id INTEGER NOT NULL REFERENCES authors(id),
    deleted INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_authors_deleted ON authors(deleted);
CREATE INDEX IF NOT EXISTS idx_books_author_deleted ON books(author_id, deleted);
"""


class SqliteDatabase:
    """
    Connection factory for the catalog database.

    Connections are opened in autocommit mode (``isolation_level=None``)
    so that transactions are started explicitly by the unit of work.
    """

    def __init__(self, db_path: Path, timeout: float = 5.0) -> None:
        """
        Initialize the database and create the schema if needed.

        Args:
            db_path: Path of the SQLite file
            timeout: Seconds a connection waits for a competing write lock
        """
        self._db_path = db_path
        self._timeout = timeout
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        """Open a new connection with row factory and foreign keys enabled."""
        try:
            conn = sqlite3.connect(
                str(self._db_path),
                timeout=self._timeout,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            raise RuntimeError(f"Could not open database {self._db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_schema(self) -> None:
        """Create the tables and indexes if they don't exist."""
        conn = self.connect()
        try:
            conn.executescript(SCHEMA)
        finally:
            conn.close()
        logger.debug(f"Schema ready at {self._db_path}")

    def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            conn = self.connect()
        except RuntimeError:
            return False
        try:
            conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        finally:
            conn.close()


def fetch_one(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> Optional[sqlite3.Row]:
    """Run a read query and return its first row, or None."""
    try:
        return conn.execute(sql, params).fetchone()
    except sqlite3.Error as e:
        raise RuntimeError(f"Database error while reading: {e}") from e


def fetch_all(conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> List[sqlite3.Row]:
    """Run a read query and return every row."""
    try:
        return conn.execute(sql, params).fetchall()
    except sqlite3.Error as e:
        raise RuntimeError(f"Database error while reading: {e}") from e


def order_by_clause(page_request: PageRequest, sortable: Mapping[str, str]) -> str:
    """
    Build the ORDER BY clause for a page request.

    The sort key is looked up in ``sortable`` (attribute name -> column), so
    only known column names ever reach the SQL text. Rows are ordered by id
    when no key is given, and id breaks ties otherwise so that consecutive
    pages never overlap.

    Raises:
        ValueError: If the sort key is not sortable
    """
    direction = page_request.direction.upper()

    if page_request.sort is None or page_request.sort == "id":
        return f"ORDER BY id {direction}"

    column = sortable.get(page_request.sort)
    if column is None:
        raise ValueError(
            f"Cannot sort by '{page_request.sort}', "
            f"expected one of: {', '.join(sorted(sortable))}"
        )
    return f"ORDER BY {column} {direction}, id ASC"
