"""
SQLite implementation of the UnitOfWork port.

A unit of work owns one connection and one transaction. Mutating work
starts with ``BEGIN IMMEDIATE``, which takes the database write lock
before the first read, so two read-modify-write sequences on the same
author can never interleave. Read-only work uses a deferred ``BEGIN``.
"""

import logging
import sqlite3
from types import TracebackType
from typing import Optional, Type

from bookshelf.domain.ports import UnitOfWork

from .sqlite_author_repository import SqliteAuthorRepository
from .sqlite_book_repository import SqliteBookRepository
from .sqlite_database import SqliteDatabase

logger = logging.getLogger(__name__)


class SqliteUnitOfWork(UnitOfWork):
    """
    Transaction scope over the author and book repositories.

    Usage:
        with SqliteUnitOfWork(database) as uow:
            author = uow.authors.find_active_by_id(1)
            uow.authors.save(author)
            uow.commit()
    """

    def __init__(self, database: SqliteDatabase, *, read_only: bool = False) -> None:
        self._database = database
        self._read_only = read_only
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "SqliteUnitOfWork":
        self._conn = self._database.connect()
        try:
            self._conn.execute("BEGIN" if self._read_only else "BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            self._conn.close()
            self._conn = None
            raise RuntimeError(f"Could not start transaction: {e}") from e

        self.books = SqliteBookRepository(self._conn)
        self.authors = SqliteAuthorRepository(self._conn, self.books)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                logger.debug(f"Rolling back after {exc_type.__name__}")
            self.rollback()
        finally:
            self._conn.close()
            self._conn = None

    def commit(self) -> None:
        """Commit the transaction."""
        try:
            self._conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while committing: {e}") from e

    def rollback(self) -> None:
        """Roll back whatever has not been committed yet."""
        if self._conn is not None and self._conn.in_transaction:
            self._conn.execute("ROLLBACK")
