"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again.
    """

    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    author: str = Field(nullable=False)
    isbn: str = Field(nullable=False, unique=True)
    year: int = Field(default=0)
