from src.books_api.core.services.book_service import (
    BookService,
    decode_payload,
    merge_book,
    parse_book_id,
)
from src.books_api.core.services.database import DbManageService, DbSessionService

__all__ = [
    "BookService",
    "DbManageService",
    "DbSessionService",
    "decode_payload",
    "merge_book",
    "parse_book_id",
]
