"""
SQLite implementation of the BookRepository port.

Every public read is restricted to ``deleted = 0``. Writes are not
filtered, so saving a book may legitimately flip its deleted flag on.
"""

import logging
import sqlite3
from datetime import UTC, datetime
from typing import List, Optional, Sequence

from bookshelf.domain.entities import Book
from bookshelf.domain.ports import BookRepository
from bookshelf.domain.value_objects import Page, PageRequest

from .sqlite_database import fetch_all, fetch_one, order_by_clause

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "title": "title",
    "pages_number": "pages_number",
    "author_id": "author_id",
    "created_at": "created_at",
}


def row_to_book(row: sqlite3.Row) -> Book:
    """Convert a database row to a Book entity."""
    return Book(
        id=row["id"],
        title=row["title"],
        pages_number=row["pages_number"],
        author_id=row["author_id"],
        deleted=bool(row["deleted"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteBookRepository(BookRepository):
    """
    Book repository bound to the connection of one unit of work.

    It never commits; the unit of work decides whether the transaction
    becomes durable.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def find_active_by_id(self, book_id: int) -> Optional[Book]:
        """Retrieve a book unless it is missing or soft-deleted."""
        row = fetch_one(
            self._conn,
            "SELECT * FROM books WHERE id = ? AND deleted = 0",
            (book_id,)
        )

        if row is None:
            return None

        return row_to_book(row)

    def find_active_by_author_ids(self, author_ids: Sequence[int]) -> List[Book]:
        """Retrieve the active books owned by any of the given authors."""
        if not author_ids:
            return []

        placeholders = ", ".join("?" * len(author_ids))
        rows = fetch_all(
            self._conn,
            f"SELECT * FROM books WHERE author_id IN ({placeholders}) "
            "AND deleted = 0 ORDER BY id",
            list(author_ids),
        )

        return [row_to_book(row) for row in rows]

    def find_all_active(self, page_request: PageRequest) -> Page[Book]:
        """Retrieve one page of active books."""
        order_by = order_by_clause(page_request, SORTABLE_COLUMNS)

        total = fetch_one(
            self._conn,
            "SELECT COUNT(*) AS cnt FROM books WHERE deleted = 0"
        )["cnt"]

        rows = fetch_all(
            self._conn,
            f"SELECT * FROM books WHERE deleted = 0 {order_by} LIMIT ? OFFSET ?",
            (page_request.size, page_request.offset),
        )

        return Page(
            content=[row_to_book(row) for row in rows],
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
            sort=page_request.sort,
        )

    def save(self, book: Book) -> Book:
        """Insert a new book or update an existing one."""
        try:
            self.upsert(book)
        except sqlite3.IntegrityError as e:
            raise ValueError(f"Book violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while saving book: {e}") from e

        return self._get_any(book.id)

    def upsert(self, book: Book) -> None:
        """
        Upsert the book row and populate generated fields on the entity.

        ``created_at`` is written on insert only.
        """
        if book.created_at is None:
            book.created_at = datetime.now(UTC)

        row = {
            "id": book.id,
            "title": book.title,
            "pages_number": book.pages_number,
            "author_id": book.author_id,
            "deleted": int(book.deleted),
            "created_at": book.created_at.isoformat(),
        }

        cursor = self._conn.execute("""
            INSERT INTO books
            (id, title, pages_number, author_id, deleted, created_at)
            VALUES
            (:id, :title, :pages_number, :author_id, :deleted, :created_at)
            ON CONFLICT(id) DO UPDATE SET
                title=excluded.title,
                pages_number=excluded.pages_number,
                deleted=excluded.deleted
        """, row)

        if book.id is None:
            book.id = cursor.lastrowid
            logger.debug(f"Inserted book id={book.id} for author_id={book.author_id}")

    def _get_any(self, book_id: int) -> Book:
        """Read back a row regardless of its deleted flag."""
        row = fetch_one(
            self._conn,
            "SELECT * FROM books WHERE id = ?",
            (book_id,)
        )
        return row_to_book(row)
