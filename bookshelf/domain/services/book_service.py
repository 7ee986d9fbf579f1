"""
Domain service for book-level use-cases.
"""

import logging

from bookshelf.domain.entities import Book
from bookshelf.domain.exceptions import BookNotFoundError
from bookshelf.domain.ports import UnitOfWorkFactory
from bookshelf.domain.value_objects import Page, PageRequest

from .validation import require_positive_int, require_text

logger = logging.getLogger(__name__)


class BookService:
    """
    Orchestrates reads, updates and deletes of single books.

    Books are only ever created through AuthorService.add_book_to_author,
    which keeps the owner reference consistent.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def get_all_active_books(self, page_request: PageRequest) -> Page[Book]:
        """
        Return one page of active books.

        Raises:
            ValueError: If page_request is None or sorts by an unknown key
        """
        if page_request is None:
            raise ValueError("Page request mustn't be null")

        with self._uow_factory(read_only=True) as uow:
            return uow.books.find_all_active(page_request)

    def get_active_book(self, book_id: int) -> Book:
        """
        Load an active book.

        Raises:
            BookNotFoundError: If the book is missing or deleted
        """
        require_positive_int(book_id, "Book id")

        with self._uow_factory(read_only=True) as uow:
            book = uow.books.find_active_by_id(book_id)

        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def update_book(self, book_id: int, title: str, pages_number: int) -> Book:
        """
        Overwrite the title and page count of an active book.

        The owner is never changed.

        Raises:
            ValueError: If any argument violates its constraint
            BookNotFoundError: If the book is missing or deleted
        """
        require_positive_int(book_id, "Book id")
        require_text(title, "Book title")
        require_positive_int(pages_number, "Number of pages")

        with self._uow_factory() as uow:
            book = uow.books.find_active_by_id(book_id)
            if book is None:
                raise BookNotFoundError(book_id)

            book.title = title
            book.pages_number = pages_number

            updated = uow.books.save(book)
            uow.commit()

        logger.info(f"Updated book id={book_id}")
        return updated

    def delete_book(self, book_id: int) -> None:
        """
        Soft-delete a book. Its author is not affected.

        Deleting a missing or already deleted book is a no-op.
        """
        require_positive_int(book_id, "Book id")

        with self._uow_factory() as uow:
            book = uow.books.find_active_by_id(book_id)
            if book is None:
                logger.debug(f"Book id={book_id} already absent, nothing to delete")
                return

            book.deleted = True
            uow.books.save(book)
            uow.commit()

        logger.info(f"Deleted book id={book_id}")
