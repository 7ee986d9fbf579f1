"""
SQLite adapters for the repository and unit-of-work ports.
"""

from .sqlite_author_repository import SqliteAuthorRepository
from .sqlite_book_repository import SqliteBookRepository
from .sqlite_database import SqliteDatabase
from .sqlite_unit_of_work import SqliteUnitOfWork

__all__ = [
    "SqliteAuthorRepository",
    "SqliteBookRepository",
    "SqliteDatabase",
    "SqliteUnitOfWork",
]
