"""Book service: validation, merge rules and persistence for the books resource."""

import json
import re

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from src.books_api.core.errors import ClientInputError, NotFoundError, StorageError
from src.books_api.core.services.database.db_session import DbSessionService
from src.books_api.entities.book import Book, BookPayload, BookRepository

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_PAYLOAD_FIELDS = {name.lower(): name for name in BookPayload.model_fields}


def parse_book_id(raw: str) -> int:
    """Parse a path-encoded book id.

    Accepts an optionally signed run of ASCII digits that fits a signed
    64-bit integer.

    Raises:
        ClientInputError: If ``raw`` is not such an integer.
    """
    if not _INT_PATTERN.fullmatch(raw):
        raise ClientInputError("Invalid book ID")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ClientInputError("Invalid book ID")
    return value


def decode_payload(body: bytes | str) -> BookPayload:
    """Decode a request body into a candidate book.

    Keys match field names case-insensitively, so ``"Title"`` and ``"ISBN"``
    are read as ``title`` and ``isbn``. When several keys match one field the
    last one wins.

    Raises:
        ClientInputError: If the body is not a JSON object whose known fields
            have the right types. ``null`` decodes to an empty candidate.
    """
    try:
        data = json.loads(body)
    except (ValueError, TypeError) as e:
        raise ClientInputError("Invalid JSON") from e

    if data is None:
        return BookPayload()
    if not isinstance(data, dict):
        raise ClientInputError("Invalid JSON")

    fields = {}
    for key, value in data.items():
        name = _PAYLOAD_FIELDS.get(key.lower())
        if name is not None:
            fields[name] = value

    try:
        return BookPayload.model_validate(fields)
    except ValidationError as e:
        raise ClientInputError("Invalid JSON") from e


def merge_book(existing: Book, payload: BookPayload) -> Book:
    """Apply the non-empty-field merge of an update.

    An empty or missing string keeps the stored title, author or isbn; a zero
    or missing year keeps the stored year. A field therefore cannot be
    cleared through an update.
    """
    return existing.model_copy(
        update={
            "title": payload.title or existing.title,
            "author": payload.author or existing.author,
            "isbn": payload.isbn or existing.isbn,
            "year": payload.year or existing.year,
        }
    )


class BookService:
    """CRUD operations for books.

    The service keeps no state of its own; every call opens one session on
    the injected database service and commits or rolls back before returning.
    """

    def __init__(self, db: DbSessionService) -> None:
        self._db = db

    def list_books(self) -> list[Book]:
        try:
            with self._db.session_scope() as session:
                return BookRepository(session).list_all()
        except SQLAlchemyError as e:
            logger.exception("Listing books failed")
            raise StorageError("Failed to list books") from e

    def get_book(self, book_id: int) -> Book:
        try:
            with self._db.session_scope() as session:
                book = BookRepository(session).get(book_id)
        except SQLAlchemyError as e:
            logger.bind(book_id=book_id).warning("Loading book failed: {}", e)
            raise StorageError("Failed to load book") from e
        if book is None:
            raise NotFoundError("Book not found")
        return book

    def create_book(self, body: bytes | str) -> Book:
        payload = decode_payload(body)
        if payload.missing_required():
            raise ClientInputError("Title, Author, and ISBN are required")

        try:
            with self._db.session_scope() as session:
                book = BookRepository(session).add(payload)
        except SQLAlchemyError as e:
            logger.bind(isbn=payload.isbn).warning("Creating book failed: {}", e)
            raise StorageError("Failed to create book") from e

        logger.bind(book_id=book.id).info("Book created")
        return book

    def update_book(self, book_id: int, body: bytes | str) -> Book:
        try:
            with self._db.session_scope() as session:
                repository = BookRepository(session)
                existing = repository.get(book_id)
                if existing is None:
                    raise NotFoundError("Book not found")
                merged = merge_book(existing, decode_payload(body))
                book = repository.save(merged)
        except SQLAlchemyError as e:
            logger.bind(book_id=book_id).warning("Updating book failed: {}", e)
            raise StorageError("Failed to update book") from e

        logger.bind(book_id=book_id).info("Book updated")
        return book

    def delete_book(self, book_id: int) -> None:
        try:
            with self._db.session_scope() as session:
                deleted = BookRepository(session).delete(book_id)
        except SQLAlchemyError as e:
            logger.bind(book_id=book_id).warning("Deleting book failed: {}", e)
            raise StorageError("Failed to delete book") from e

        if not deleted:
            raise NotFoundError("Book not found")
        logger.bind(book_id=book_id).info("Book deleted")
