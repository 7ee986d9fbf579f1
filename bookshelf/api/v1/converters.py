"""
Converters between domain entities/value objects and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer. The functions are pure: they never touch the store.
"""

from bookshelf.domain import entities as domain
from bookshelf.domain import value_objects as domain_vo
from bookshelf.api.v1 import schemas as api


def domain_book_to_api(book: domain.Book) -> api.Book:
    """
    Convert a domain Book entity to an API Book model.

    Args:
        book: Persisted domain Book entity

    Returns:
        API Book model
    """
    return api.Book(
        id=book.id,
        author_id=book.author_id,
        title=book.title,
        pages_number=book.pages_number,
        created_at=book.created_at,
    )


def domain_author_to_api(author: domain.Author) -> api.Author:
    """Convert a domain Author to an API Author, leaving its books out."""
    return api.Author(
        id=author.id,
        name=author.name,
        created_at=author.created_at,
    )


def domain_author_with_books_to_api(author: domain.Author) -> api.AuthorWithBooks:
    """Convert a domain Author to an API Author including its active books."""
    return api.AuthorWithBooks(
        id=author.id,
        name=author.name,
        created_at=author.created_at,
        books=[domain_book_to_api(book) for book in author.get_books()],
    )


def domain_book_page_to_api(page: domain_vo.Page[domain.Book]) -> api.BookPage:
    """
    Convert a domain Page of books to an API BookPage model.

    Args:
        page: Page returned by the book service

    Returns:
        API BookPage model
    """
    api_page = page.map(domain_book_to_api)
    return api.BookPage(
        content=api_page.content,
        page=api_page.number,
        size=api_page.size,
        total_elements=api_page.total_elements,
        total_pages=api_page.total_pages,
        sort=api_page.sort,
    )


def api_page_params_to_domain(
    page: int,
    size: int,
    sort: str | None = None,
    direction: str = "asc",
) -> domain_vo.PageRequest:
    """
    Convert listing query parameters to a domain PageRequest.

    Raises:
        ValueError: If the parameters violate PageRequest constraints
    """
    return domain_vo.PageRequest(
        page=page,
        size=size,
        sort=sort,
        direction=direction.lower(),
    )
