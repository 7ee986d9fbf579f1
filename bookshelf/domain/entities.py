"""
Domain entities for the bookshelf catalog.

Entities are objects with a unique identity that runs through time and
different representations. An Author together with the Books it owns forms
the aggregate: soft-deleting the Author must soft-delete its Books too.

Identities are surrogate integers assigned by the store on first persist.
Until then the id is None, and an unsaved instance is never equal to any
other instance.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass
class Book:
    """
    Represents a book written by exactly one author.

    The owner is held by id reference (``author_id``) rather than by an
    object reference. It is set when the book is attached to its author and
    never changes afterwards.
    """

    id: Optional[int]
    """Surrogate identifier, None until the book is persisted"""

    title: str
    """Book title"""

    pages_number: int
    """Number of pages, always positive"""

    author_id: Optional[int] = None
    """Id of the owning author"""

    deleted: bool = False
    """Soft-delete flag; deleted books are invisible to normal reads"""

    created_at: Optional[datetime] = None
    """When the book was first persisted, never updated"""

    def __eq__(self, other: object) -> bool:
        """Two books are equal if both are persisted and share the same ID."""
        if self is other:
            return True
        if not isinstance(other, Book):
            return NotImplemented
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on book ID, or on the class for unsaved books."""
        if self.id is None:
            return hash(Book)
        return hash(self.id)

    def is_active(self) -> bool:
        """Check if the book has not been soft-deleted."""
        return not self.deleted

    @staticmethod
    def build(
        id: Optional[int],
        title: str,
        pages_number: int,
        author: Optional["Author"] = None,
    ) -> "Book":
        """
        Factory method to build a book owned by ``author``.

        No validation is performed here; inputs are checked by the services
        before any entity is built.
        """
        return Book(
            id=id,
            title=title,
            pages_number=pages_number,
            author_id=author.id if author is not None else None,
        )


@dataclass
class Author:
    """
    Represents an author and the aggregate root for their books.

    The book collection only ever holds the books attached in memory or the
    active books loaded by the store. Callers get a tuple snapshot, so
    mutating what they receive never touches the author.
    """

    id: Optional[int]
    """Surrogate identifier, None until the author is persisted"""

    name: str
    """Author name"""

    deleted: bool = False
    """Soft-delete flag; deleted authors are invisible to normal reads"""

    created_at: Optional[datetime] = None
    """When the author was first persisted, never updated"""

    _books: List[Book] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __eq__(self, other: object) -> bool:
        """Two authors are equal if both are persisted and share the same ID."""
        if self is other:
            return True
        if not isinstance(other, Author):
            return NotImplemented
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on author ID, or on the class for unsaved authors."""
        if self.id is None:
            return hash(Author)
        return hash(self.id)

    @property
    def books(self) -> Tuple[Book, ...]:
        """Snapshot of the attached books."""
        return tuple(self._books)

    def get_books(self) -> Tuple[Book, ...]:
        """Return an immutable snapshot of the attached books."""
        return self.books

    def is_active(self) -> bool:
        """Check if the author has not been soft-deleted."""
        return not self.deleted

    def add_book(self, book: Book) -> None:
        """
        Attach a book to this author.

        Appends the book to the collection and back-fills its owner
        reference, so both sides of the relationship stay consistent.
        Callers must only attach books to an active author.

        Raises:
            ValueError: If the book already belongs to another author
        """
        if book.author_id is not None and book.author_id != self.id:
            raise ValueError(
                f"Book {book.id} belongs to author {book.author_id}, "
                f"cannot attach it to author {self.id}"
            )

        self._books.append(book)
        book.author_id = self.id

    def soft_delete_all_books(self) -> None:
        """
        Mark every attached book as deleted.

        The author itself is left untouched; the caller flags it deleted
        within the same unit of work.
        """
        for book in self._books:
            book.deleted = True

    @staticmethod
    def build(id: Optional[int], name: str) -> "Author":
        """Factory method to build an author with no books."""
        return Author(id=id, name=name)
