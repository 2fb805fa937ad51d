"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.books_api.runtime.config.config_data import DatabaseConfig
from src.books_api.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None):
        """Initialize the database engine and session factory.

        Args:
            db_config: Database settings, defaults to the current context's.
        """
        db_config = db_config or get_config().database
        self._config = db_config

        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(db_config),
        }
        if db_config.is_memory:
            # Every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        elif not db_config.is_sqlite:
            engine_kwargs["pool_pre_ping"] = True

        logger.info("Initializing database engine for {}", db_config.connection_string)
        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    @staticmethod
    def _get_connect_args(db_config: DatabaseConfig) -> dict[str, Any]:
        """Get database-specific connection arguments."""
        if db_config.is_sqlite:
            return {
                "check_same_thread": False,  # Sessions are used from worker threads
                "timeout": db_config.timeout,  # Lock timeout
            }
        return {}

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).warning(
                "Database transaction rolled back: {}", e
            )
            raise
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
