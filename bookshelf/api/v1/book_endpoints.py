"""
API endpoints for book operations.

Books are created through the author endpoints; this router lists, reads,
updates and deletes them.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from bookshelf.config import Settings
from bookshelf.domain.exceptions import NotFoundError
from bookshelf.domain.services import BookService
from bookshelf.api.v1 import schemas as api
from bookshelf.api.v1.converters import (
    api_page_params_to_domain,
    domain_book_page_to_api,
    domain_book_to_api,
)
from bookshelf.api.v1.dependencies import get_book_service, get_settings

router = APIRouter(prefix="/books")


@router.get("", response_model=api.BookPage)
def list_books(
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(default=None, ge=1, le=100, description="Page size"),
    sort: Optional[str] = Query(default=None, description="Attribute to sort by"),
    direction: Literal["asc", "desc"] = Query(default="asc", description="Sort direction"),
    service: BookService = Depends(get_book_service),
    settings: Settings = Depends(get_settings),
) -> api.BookPage:
    """
    List active books, one page at a time.

    Raises:
        400: Unknown sort key or page out of range
        503: Database unavailable
    """
    try:
        page_request = api_page_params_to_domain(
            page=page,
            size=size if size is not None else settings.default_page_size,
            sort=sort,
            direction=direction,
        )
        book_page = service.get_all_active_books(page_request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_book_page_to_api(book_page)


@router.get("/{book_id}", response_model=api.Book)
def get_book(
    book_id: int = Path(gt=0, description="Book id"),
    service: BookService = Depends(get_book_service),
) -> api.Book:
    """
    Get an active book by its id.

    Raises:
        404: Book not found or deleted
        503: Database unavailable
    """
    try:
        book = service.get_active_book(book_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_book_to_api(book)


@router.put("/update/{book_id}", response_model=api.Book)
def update_book(
    request: api.BookUpdateRequest,
    book_id: int = Path(gt=0, description="Book id"),
    service: BookService = Depends(get_book_service),
) -> api.Book:
    """
    Replace the title and page count of an active book.

    Raises:
        400: Blank title
        404: Book not found or deleted
        503: Database unavailable
    """
    try:
        book = service.update_book(book_id, request.title, request.pages_number)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return domain_book_to_api(book)


@router.delete(
    "/delete/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_book(
    book_id: int = Path(gt=0, description="Book id"),
    service: BookService = Depends(get_book_service),
) -> Response:
    """
    Soft-delete a book. Always answers 204, also when it was already gone.
    """
    try:
        service.delete_book(book_id)
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
