"""
Domain services package.

Services orchestrate domain logic that doesn't naturally belong to a single
entity. Each use-case runs inside one unit of work obtained from the
factory the service was built with.

Following Hexagonal Architecture principles, services depend only on domain
entities, value objects, and port protocols (never on concrete implementations).
"""

from .author_service import AuthorService
from .book_service import BookService

__all__ = [
    "AuthorService",
    "BookService",
]
