"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the database and services
for use with FastAPI's Depends() system.

Note: We use module-level singletons instead of @lru_cache with Depends()
parameters, which is an antipattern that can cause unexpected behavior.
"""

from functools import partial
from typing import Optional

from bookshelf.config import Settings
from bookshelf.domain.ports import UnitOfWorkFactory
from bookshelf.domain.services import AuthorService, BookService
from bookshelf.infrastructure.db import SqliteDatabase, SqliteUnitOfWork

# Module-level singletons (initialized lazily)
_settings: Optional[Settings] = None
_database: Optional[SqliteDatabase] = None
_author_service: Optional[AuthorService] = None
_book_service: Optional[BookService] = None


def get_settings() -> Settings:
    """Provide the settings read from the environment."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_database() -> SqliteDatabase:
    """Provide a singleton instance of the SQLite database."""
    global _database
    if _database is None:
        settings = get_settings()
        _database = SqliteDatabase(
            settings.db_path,
            timeout=settings.db_timeout_seconds,
        )
    return _database


def get_uow_factory() -> UnitOfWorkFactory:
    """Provide a factory producing one SQLite unit of work per use-case."""
    return partial(SqliteUnitOfWork, get_database())


def get_author_service() -> AuthorService:
    """Provide the Author Service with its unit-of-work factory wired."""
    global _author_service
    if _author_service is None:
        _author_service = AuthorService(uow_factory=get_uow_factory())
    return _author_service


def get_book_service() -> BookService:
    """Provide the Book Service with its unit-of-work factory wired."""
    global _book_service
    if _book_service is None:
        _book_service = BookService(uow_factory=get_uow_factory())
    return _book_service


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to point DB_PATH at a temporary file and get
    fresh instances on the next request.
    """
    global _settings, _database, _author_service, _book_service

    _settings = None
    _database = None
    _author_service = None
    _book_service = None
