"""
API endpoints for author operations.

This module defines the FastAPI routes for reading, creating and deleting
authors and for attaching books to them. It handles HTTP concerns and
delegates to the AuthorService.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from bookshelf.domain.exceptions import NotFoundError
from bookshelf.domain.services import AuthorService
from bookshelf.api.v1 import schemas as api
from bookshelf.api.v1.converters import (
    domain_author_to_api,
    domain_author_with_books_to_api,
)
from bookshelf.api.v1.dependencies import get_author_service

router = APIRouter(prefix="/authors")


@router.get("/{author_id}", response_model=api.AuthorWithBooks)
def get_author(
    author_id: int = Path(gt=0, description="Author id"),
    service: AuthorService = Depends(get_author_service),
) -> api.AuthorWithBooks:
    """
    Get an active author with its active books.

    Raises:
        404: Author not found or deleted
        503: Database unavailable
    """
    try:
        author = service.get_active_author(author_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_author_with_books_to_api(author)


@router.post(
    "/new",
    response_model=api.Author,
    status_code=status.HTTP_201_CREATED,
)
def create_author(
    request: api.AuthorRequest,
    service: AuthorService = Depends(get_author_service),
) -> api.Author:
    """
    Create a new author with no books.

    Raises:
        400: Blank name
        503: Database unavailable
    """
    try:
        author = service.create_author(request.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_author_to_api(author)


@router.post(
    "/book",
    response_model=api.AuthorWithBooks,
    status_code=status.HTTP_201_CREATED,
)
def add_book(
    request: api.BookRequest,
    service: AuthorService = Depends(get_author_service),
) -> api.AuthorWithBooks:
    """
    Attach a new book to an active author.

    Returns the author with all its active books, the new one included.

    Raises:
        400: Blank title
        404: Author not found or deleted
        503: Database unavailable
    """
    try:
        author = service.add_book_to_author(
            request.author_id,
            request.title,
            request.pages_number,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_author_with_books_to_api(author)


@router.delete(
    "/delete/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_author(
    author_id: int = Path(gt=0, description="Author id"),
    service: AuthorService = Depends(get_author_service),
) -> Response:
    """
    Soft-delete an author and all its books.

    Always answers 204, also when the author was already gone.
    """
    try:
        service.delete_author(author_id)
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
