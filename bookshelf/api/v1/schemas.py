"""
Request and response models for the v1 API.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# request bodies

class AuthorRequest(BaseModel):
    """
    Request body for POST /authors/new.
    """
    name: str = Field(min_length=1, description="Author name")


class BookRequest(BaseModel):
    """
    Request body for POST /authors/book.
    """
    author_id: int = Field(gt=0, description="Id of the owning author")
    title: str = Field(min_length=1, description="Book title")
    pages_number: int = Field(gt=0, description="Number of pages")


class BookUpdateRequest(BaseModel):
    """
    Request body for PUT /books/update/{id}. The owner cannot be changed.
    """
    title: str = Field(min_length=1, description="Book title")
    pages_number: int = Field(gt=0, description="Number of pages")


# response bodies

class Book(BaseModel):
    """
    API representation of an active Book entity.
    """
    id: int = Field(description="Unique identifier of the book")
    author_id: int = Field(description="Id of the owning author")
    title: str = Field(description="Book title")
    pages_number: int = Field(description="Number of pages")
    created_at: datetime = Field(description="When the book was added to the catalog")


class Author(BaseModel):
    """
    API representation of an Author without its books.
    """
    id: int = Field(description="Unique identifier of the author")
    name: str = Field(description="Author name")
    created_at: datetime = Field(description="When the author was added to the catalog")


class AuthorWithBooks(Author):
    """
    API representation of an Author with its active books.
    """
    books: list[Book] = Field(default_factory=list, description="Active books of the author")


class BookPage(BaseModel):
    """
    One page of active books.
    """
    content: list[Book] = Field(description="Books on this page")
    page: int = Field(ge=0, description="Zero-based page index")
    size: int = Field(ge=1, description="Requested page size")
    total_elements: int = Field(ge=0, description="Active books across all pages")
    total_pages: int = Field(ge=0, description="Number of pages")
    sort: str | None = Field(default=None, description="Sort key used, if any")
