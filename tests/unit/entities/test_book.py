"""Unit tests for the book entity package.

Tests the entity structure where domain model, database model,
and repository are colocated in the same package.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.books_api.entities.book import Book, BookPayload, BookRepository, BookTable


class TestBook:
    """Test the Book domain entity."""

    def test_book_from_row(self):
        row = BookTable(id=3, title="Clean Code", author="Robert C. Martin", isbn="9780132350884", year=2008)

        book = Book.model_validate(row)

        assert book == Book(
            id=3,
            title="Clean Code",
            author="Robert C. Martin",
            isbn="9780132350884",
            year=2008,
        )

    def test_year_defaults_to_zero(self):
        book = Book(id=1, title="T", author="A", isbn="1")
        assert book.year == 0

    def test_json_shape(self):
        book = Book(id=1, title="T", author="A", isbn="1", year=2000)

        assert book.model_dump() == {
            "id": 1,
            "title": "T",
            "author": "A",
            "isbn": "1",
            "year": 2000,
        }


class TestBookPayload:
    """Test the request candidate model."""

    def test_all_fields_optional(self):
        payload = BookPayload()

        assert payload.title is None
        assert payload.year is None
        assert payload.missing_required()

    @pytest.mark.parametrize(
        ("fields", "missing"),
        [
            ({"title": "T", "author": "A", "isbn": "1"}, False),
            ({"title": "T", "author": "A", "isbn": "1", "year": 0}, False),
            ({"title": "T", "author": "A"}, True),
            ({"title": "", "author": "A", "isbn": "1"}, True),
            ({"author": "A", "isbn": "1"}, True),
        ],
    )
    def test_missing_required(self, fields: dict, missing: bool):
        assert BookPayload(**fields).missing_required() is missing


class TestBookRepository:
    """Test the BookRepository against an in-memory database."""

    @pytest.fixture
    def repository(self, session: Session) -> BookRepository:
        return BookRepository(session)

    def test_add_assigns_id(self, repository: BookRepository, session: Session):
        book = repository.add(BookPayload(title="T", author="A", isbn="1", year=1999))
        session.commit()

        assert book.id is not None
        assert book.id > 0
        row = session.exec(select(BookTable).where(BookTable.id == book.id)).one()
        assert row.isbn == "1"

    def test_add_defaults_missing_year(self, repository: BookRepository):
        book = repository.add(BookPayload(title="T", author="A", isbn="1"))
        assert book.year == 0

    def test_get_returns_domain_entity(self, repository: BookRepository):
        created = repository.add(BookPayload(title="T", author="A", isbn="1"))

        result = repository.get(created.id)

        assert isinstance(result, Book)
        assert not isinstance(result, BookTable)
        assert result == created

    def test_get_not_found(self, repository: BookRepository):
        assert repository.get(999) is None

    def test_list_all(self, repository: BookRepository):
        assert repository.list_all() == []

        repository.add(BookPayload(title="One", author="A", isbn="1"))
        repository.add(BookPayload(title="Two", author="A", isbn="2"))

        assert [book.title for book in repository.list_all()] == ["One", "Two"]

    def test_save_overwrites_fields(self, repository: BookRepository):
        created = repository.add(BookPayload(title="T", author="A", isbn="1", year=1))

        saved = repository.save(created.model_copy(update={"title": "New", "year": 2}))

        assert saved.title == "New"
        assert saved.year == 2
        assert repository.get(created.id) == saved

    def test_save_missing_raises(self, repository: BookRepository):
        with pytest.raises(ValueError, match="not found"):
            repository.save(Book(id=42, title="T", author="A", isbn="1"))

    def test_delete(self, repository: BookRepository):
        created = repository.add(BookPayload(title="T", author="A", isbn="1"))

        assert repository.delete(created.id) is True
        assert repository.get(created.id) is None
        assert repository.delete(created.id) is False

    def test_count(self, repository: BookRepository):
        assert repository.count() == 0
        repository.add(BookPayload(title="T", author="A", isbn="1"))
        assert repository.count() == 1

    def test_isbn_is_unique(self, repository: BookRepository):
        repository.add(BookPayload(title="T", author="A", isbn="1"))

        with pytest.raises(IntegrityError):
            repository.add(BookPayload(title="Other", author="B", isbn="1"))
