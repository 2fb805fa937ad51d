"""Data-access layer for books."""

from sqlalchemy import func
from sqlmodel import Session, select

from .entity import Book, BookPayload
from .table import BookTable


class BookRepository:
    """Data-access layer for books.

    The repository flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Book]:
        rows = self._session.exec(select(BookTable).order_by(BookTable.id)).all()
        return [Book.model_validate(row) for row in rows]

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row)

    def add(self, payload: BookPayload) -> Book:
        """Insert a new row from the business fields of ``payload``."""
        row = BookTable(
            title=payload.title or "",
            author=payload.author or "",
            isbn=payload.isbn or "",
            year=payload.year or 0,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row)

    def save(self, book: Book) -> Book:
        """Overwrite every business field of an existing row."""
        row = self._session.get(BookTable, book.id)
        if row is None:
            raise ValueError(f"Book with ID {book.id} not found")
        row.title = book.title
        row.author = book.author
        row.isbn = book.isbn
        row.year = book.year
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row)

    def delete(self, book_id: int) -> bool:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(BookTable)).one()
