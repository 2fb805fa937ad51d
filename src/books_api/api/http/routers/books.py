"""Book API router with CRUD operations.

Handlers are synchronous so each request runs on the server's worker pool.
Request bodies arrive as raw bytes; decoding and validation belong to the
book service so that an update reports a missing book before a bad body.
"""

from fastapi import APIRouter, Depends, Response

from src.books_api.api.http.deps import get_book_service, get_raw_body
from src.books_api.core.services import BookService, parse_book_id
from src.books_api.entities.book import Book

router = APIRouter(prefix="/api/v1/books", tags=["books"])


@router.get("", response_model=list[Book])
def list_books(service: BookService = Depends(get_book_service)) -> list[Book]:
    """List all books."""
    return service.list_books()


@router.post("", response_model=Book, status_code=201)
def create_book(
    body: bytes = Depends(get_raw_body),
    service: BookService = Depends(get_book_service),
) -> Book:
    """Create a new book."""
    return service.create_book(body)


@router.get("/{book_id}", response_model=Book)
def get_book(book_id: str, service: BookService = Depends(get_book_service)) -> Book:
    """Get a book by ID."""
    return service.get_book(parse_book_id(book_id))


@router.put("/{book_id}", response_model=Book)
def update_book(
    book_id: str,
    body: bytes = Depends(get_raw_body),
    service: BookService = Depends(get_book_service),
) -> Book:
    """Update the non-empty fields of a book."""
    return service.update_book(parse_book_id(book_id), body)


@router.delete("/{book_id}", status_code=204, response_class=Response)
def delete_book(
    book_id: str, service: BookService = Depends(get_book_service)
) -> Response:
    """Delete a book."""
    service.delete_book(parse_book_id(book_id))
    return Response(status_code=204)
