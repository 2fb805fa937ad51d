"""Errors raised by the book service and their HTTP status mapping."""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced by the service."""

    CLIENT_INPUT = "client_input"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CLIENT_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
}


def status_code_for(kind: ErrorKind) -> int:
    """Return the HTTP status code for an error kind."""
    return _STATUS_BY_KIND[kind]


class BookServiceError(Exception):
    """Base class for every failure the book service reports to callers."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)


class ClientInputError(BookServiceError):
    """Malformed id, malformed JSON or a missing required field."""

    kind = ErrorKind.CLIENT_INPUT


class NotFoundError(BookServiceError):
    """A well-formed id with no matching book."""

    kind = ErrorKind.NOT_FOUND


class StorageError(BookServiceError):
    """Any failure from the persistence engine, constraint violations included."""

    kind = ErrorKind.STORAGE
