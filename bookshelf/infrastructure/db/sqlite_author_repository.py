"""
SQLite implementation of the AuthorRepository port.

An author read from this repository carries only its active books, loaded
by a query on ``books.author_id`` at the moment of the read. Nothing is
cached between reads, so a concurrently deleted book never reappears.
"""

import logging
import sqlite3
from datetime import UTC, datetime
from typing import Dict, List, Optional

from bookshelf.domain.entities import Author, Book
from bookshelf.domain.ports import AuthorRepository
from bookshelf.domain.value_objects import Page, PageRequest

from .sqlite_book_repository import SqliteBookRepository
from .sqlite_database import fetch_all, fetch_one, order_by_clause

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "name": "name",
    "created_at": "created_at",
}


def row_to_author(row: sqlite3.Row) -> Author:
    """Convert a database row to an Author entity without books."""
    return Author(
        id=row["id"],
        name=row["name"],
        deleted=bool(row["deleted"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteAuthorRepository(AuthorRepository):
    """
    Author repository bound to the connection of one unit of work.

    Saving an author cascades to the books attached to it, using the book
    repository that shares the same connection and transaction.
    """

    def __init__(self, conn: sqlite3.Connection, books: SqliteBookRepository) -> None:
        self._conn = conn
        self._books = books

    def find_active_by_id(self, author_id: int) -> Optional[Author]:
        """Retrieve an active author together with its active books."""
        row = fetch_one(
            self._conn,
            "SELECT * FROM authors WHERE id = ? AND deleted = 0",
            (author_id,)
        )

        if row is None:
            return None

        return self._with_books([row_to_author(row)])[0]

    def find_all_active(self, page_request: PageRequest) -> Page[Author]:
        """Retrieve one page of active authors, each with its active books."""
        order_by = order_by_clause(page_request, SORTABLE_COLUMNS)

        total = fetch_one(
            self._conn,
            "SELECT COUNT(*) AS cnt FROM authors WHERE deleted = 0"
        )["cnt"]

        rows = fetch_all(
            self._conn,
            f"SELECT * FROM authors WHERE deleted = 0 {order_by} LIMIT ? OFFSET ?",
            (page_request.size, page_request.offset),
        )

        return Page(
            content=self._with_books([row_to_author(row) for row in rows]),
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
            sort=page_request.sort,
        )

    def save(self, author: Author) -> Author:
        """Insert or update the author, then every book attached to it."""
        try:
            self._write(author)
            for book in author.books:
                book.author_id = author.id
                self._books.upsert(book)
        except sqlite3.IntegrityError as e:
            raise ValueError(f"Author violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while saving author: {e}") from e

        return self._get_any(author.id)

    def _write(self, author: Author) -> None:
        """Upsert the author row; ``created_at`` is written on insert only."""
        if author.created_at is None:
            author.created_at = datetime.now(UTC)

        row = {
            "id": author.id,
            "name": author.name,
            "deleted": int(author.deleted),
            "created_at": author.created_at.isoformat(),
        }

        cursor = self._conn.execute("""
            INSERT INTO authors (id, name, deleted, created_at)
            VALUES (:id, :name, :deleted, :created_at)
            ON CONFLICT(id) DO UPDATE SET
                name=excluded.name,
                deleted=excluded.deleted
        """, row)

        if author.id is None:
            author.id = cursor.lastrowid
            logger.debug(f"Inserted author id={author.id}")

    def _get_any(self, author_id: int) -> Author:
        """Read back an author regardless of its deleted flag."""
        row = fetch_one(
            self._conn,
            "SELECT * FROM authors WHERE id = ?",
            (author_id,)
        )
        return self._with_books([row_to_author(row)])[0]

    def _with_books(self, authors: List[Author]) -> List[Author]:
        """Attach each author's active books with a single query."""
        by_id: Dict[int, Author] = {author.id: author for author in authors}
        books: List[Book] = self._books.find_active_by_author_ids(list(by_id))

        for book in books:
            by_id[book.author_id].add_book(book)

        return authors
