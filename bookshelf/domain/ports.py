"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Every read path on the repositories is restricted to active (not
soft-deleted) rows. No caller can observe a deleted entity as if it were
live, because there is no unfiltered read to call.
"""

from types import TracebackType
from typing import Optional, Protocol, Type

from .entities import Author, Book
from .value_objects import Page, PageRequest


class AuthorRepository(Protocol):
    """
    Port for persisting and retrieving authors.

    Authors returned by this repository carry their active books, loaded
    by a query on the owner id at read time.
    """

    def find_active_by_id(self, author_id: int) -> Optional[Author]:
        """
        Retrieve an active author with its active books.

        Args:
            author_id: The author's identifier

        Returns:
            The Author if it exists and is not deleted, None otherwise.
            A missing row and a soft-deleted row are the same outcome.
        """
        ...

    def find_all_active(self, page_request: PageRequest) -> Page[Author]:
        """
        Retrieve one page of active authors.

        Args:
            page_request: Page index, size and optional sort key

        Returns:
            Page whose totals count only active authors

        Raises:
            ValueError: If the sort key is not a sortable attribute
        """
        ...

    def save(self, author: Author) -> Author:
        """
        Insert or update an author and cascade to its attached books.

        An author (or book) with a None id is inserted and receives an id
        and creation timestamp; otherwise the existing row is updated. No
        visibility filter applies on write.

        Args:
            author: The author to persist

        Returns:
            The persisted author, reloaded with its active books

        Raises:
            ValueError: If the data violates a storage constraint
            RuntimeError: If a database error occurs
        """
        ...


class BookRepository(Protocol):
    """Port for persisting and retrieving books."""

    def find_active_by_id(self, book_id: int) -> Optional[Book]:
        """
        Retrieve an active book.

        Returns:
            The Book if it exists and is not deleted, None otherwise
        """
        ...

    def find_all_active(self, page_request: PageRequest) -> Page[Book]:
        """
        Retrieve one page of active books.

        Raises:
            ValueError: If the sort key is not a sortable attribute
        """
        ...

    def save(self, book: Book) -> Book:
        """
        Insert or update a book.

        Raises:
            ValueError: If the data violates a storage constraint
            RuntimeError: If a database error occurs
        """
        ...


class UnitOfWork(Protocol):
    """
    Port for a single atomic transaction over both repositories.

    Usage:
        with uow:
            author = uow.authors.find_active_by_id(1)
            ...
            uow.commit()

    Leaving the block without calling commit(), or because of an
    exception, rolls back everything done inside it.
    """

    authors: AuthorRepository
    books: BookRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        ...

    def commit(self) -> None:
        """Make the work done in this transaction durable."""
        ...

    def rollback(self) -> None:
        """Discard the work done in this transaction."""
        ...


class UnitOfWorkFactory(Protocol):
    """Callable producing a fresh unit of work for each use-case."""

    def __call__(self, *, read_only: bool = False) -> UnitOfWork:
        ...
