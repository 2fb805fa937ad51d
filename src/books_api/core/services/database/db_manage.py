"""Schema creation and sample data for the books table."""

from loguru import logger
from sqlmodel import SQLModel

from src.books_api.core.services.database.db_session import DbSessionService
from src.books_api.entities.book import BookPayload, BookRepository

SAMPLE_BOOKS: tuple[BookPayload, ...] = (
    BookPayload(
        title="The Go Programming Language",
        author="Alan Donovan",
        isbn="9780134190440",
        year=2015,
    ),
    BookPayload(
        title="Clean Code", author="Robert C. Martin", isbn="9780132350884", year=2008
    ),
    BookPayload(
        title="The Pragmatic Programmer",
        author="David Thomas",
        isbn="9780201616224",
        year=1999,
    ),
    BookPayload(
        title="Design Patterns", author="Gang of Four", isbn="9780201633612", year=1994
    ),
    BookPayload(
        title="Refactoring", author="Martin Fowler", isbn="9780201485677", year=1999
    ),
)


class DbManageService:
    def __init__(self, db_service: DbSessionService):
        self._db = db_service

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        from src.books_api.entities.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._db.engine)
        logger.info("Database initialized with tables.")

    def seed(self) -> int:
        """Insert the sample books when the table is empty.

        Returns:
            Number of books inserted.
        """
        with self._db.session_scope() as session:
            repository = BookRepository(session)
            if repository.count() > 0:
                return 0
            for payload in SAMPLE_BOOKS:
                repository.add(payload)

        logger.info("Database seeded with {} sample books", len(SAMPLE_BOOKS))
        return len(SAMPLE_BOOKS)

    def init_db(self, seed: bool = True) -> int:
        self.create_all()
        return self.seed() if seed else 0
