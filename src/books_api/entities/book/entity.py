"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A stored book as returned by the API.

    ``id`` is assigned by the database on creation and never changes.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Surrogate identifier assigned by the database")
    title: str = Field(description="Title")
    author: str = Field(description="Author")
    isbn: str = Field(description="ISBN, unique across all books")
    year: int = Field(default=0, description="Publication year, 0 when unknown")


class BookPayload(BaseModel):
    """Candidate book decoded from a create or update request body.

    Every business field is optional so the same model serves both
    operations. Values are strictly typed and unknown keys (``id`` included)
    are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    year: int | None = Field(default=None, ge=-(2**63), le=2**63 - 1)

    def missing_required(self) -> bool:
        """True when title, author or isbn is absent or empty."""
        return not (self.title and self.author and self.isbn)
