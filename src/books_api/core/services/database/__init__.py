from .db_manage import SAMPLE_BOOKS, DbManageService
from .db_session import DbSessionService

__all__ = ["SAMPLE_BOOKS", "DbManageService", "DbSessionService"]
