from dataclasses import dataclass

from src.books_api.core.services import BookService, DbManageService, DbSessionService
from src.books_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    database_manage_service: DbManageService
    book_service: BookService


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Wire the services for one application instance."""
    database_service = DbSessionService(config.database)
    return ApplicationDependencies(
        config=config,
        database_service=database_service,
        database_manage_service=DbManageService(database_service),
        book_service=BookService(database_service),
    )
