"""
Domain layer - Core business logic and entities.

This layer contains the author aggregate, value objects, and defines
the ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Author, Book
from .exceptions import AuthorNotFoundError, BookNotFoundError, NotFoundError
from .value_objects import Page, PageRequest

__all__ = [
    # Entities
    "Author",
    "Book",
    # Errors
    "NotFoundError",
    "AuthorNotFoundError",
    "BookNotFoundError",
    # Value Objects
    "Page",
    "PageRequest",
]
