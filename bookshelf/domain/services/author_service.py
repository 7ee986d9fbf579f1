"""
Domain service for the author aggregate.

Each use-case runs inside one unit of work. The read that decides what to
write (is the author still active? which books does it own?) happens in
the same transaction as the write, so a concurrent delete cannot slip in
between them and leave a live book under a deleted author.
"""

import logging

from bookshelf.domain.entities import Author, Book
from bookshelf.domain.exceptions import AuthorNotFoundError
from bookshelf.domain.ports import UnitOfWorkFactory

from .validation import require_positive_int, require_text

logger = logging.getLogger(__name__)


class AuthorService:
    """
    Orchestrates the use-cases that act on an author and its books.

    Usage:
        service = AuthorService(uow_factory=partial(SqliteUnitOfWork, database))
        author = service.create_author("Pushkin")
        author = service.add_book_to_author(author.id, "Onegin", 324)
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        """
        Initialize the service.

        Args:
            uow_factory: Callable returning a fresh unit of work per call
        """
        self._uow_factory = uow_factory

    def get_active_author(self, author_id: int) -> Author:
        """
        Load an active author with its active books.

        Raises:
            ValueError: If author_id is not a positive integer
            AuthorNotFoundError: If the author is missing or deleted
        """
        require_positive_int(author_id, "Author id")

        with self._uow_factory(read_only=True) as uow:
            author = uow.authors.find_active_by_id(author_id)

        if author is None:
            raise AuthorNotFoundError(author_id)
        return author

    def create_author(self, name: str) -> Author:
        """
        Create and persist a new author with no books.

        Raises:
            ValueError: If name is blank
        """
        require_text(name, "Author name")

        with self._uow_factory() as uow:
            created = uow.authors.save(Author.build(None, name))
            uow.commit()

        logger.info(f"Created author id={created.id}")
        return created

    def add_book_to_author(self, author_id: int, title: str, pages_number: int) -> Author:
        """
        Attach a new book to an active author.

        The author is re-read inside the transaction; that read is the only
        admission check, so a book is never attached to a deleted author.

        Args:
            author_id: Owner of the new book
            title: Book title
            pages_number: Positive page count

        Returns:
            The updated author with all its active books

        Raises:
            ValueError: If any argument violates its constraint
            AuthorNotFoundError: If the author is missing or deleted
        """
        require_positive_int(author_id, "Author id")
        require_text(title, "Book title")
        require_positive_int(pages_number, "Number of pages")

        with self._uow_factory() as uow:
            author = uow.authors.find_active_by_id(author_id)
            if author is None:
                raise AuthorNotFoundError(author_id)

            book = Book.build(None, title, pages_number, author)
            author.add_book(book)

            updated = uow.authors.save(author)
            uow.commit()

        logger.info(f"Added book id={book.id} to author id={author_id}")
        return updated

    def delete_author(self, author_id: int) -> None:
        """
        Soft-delete an author and every book it currently owns.

        Deleting a missing or already deleted author is a no-op, so the call
        can be retried safely.

        Raises:
            ValueError: If author_id is not a positive integer
        """
        require_positive_int(author_id, "Author id")

        with self._uow_factory() as uow:
            author = uow.authors.find_active_by_id(author_id)
            if author is None:
                logger.debug(f"Author id={author_id} already absent, nothing to delete")
                return

            author.soft_delete_all_books()
            author.deleted = True

            uow.authors.save(author)
            uow.commit()

        logger.info(f"Deleted author id={author_id} with {len(author.books)} books")
