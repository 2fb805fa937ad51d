"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

SQLITE_MEMORY_PATH = ":memory:"


class CORSConfig(BaseModel):
    """Cross-origin headers written on every response."""

    allow_origin: str = Field(default="*")
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["Content-Type", "Authorization"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    path: str = Field(
        default="books.db", description="SQLite database file location"
    )
    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; takes precedence over path when set",
    )
    seed: bool = Field(
        default=True, description="Insert the sample books when the table is empty"
    )
    timeout: int = Field(default=20, description="SQLite lock timeout in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the SQLAlchemy connection string."""
        if self.url:
            return self.url
        if self.path == SQLITE_MEMORY_PATH:
            return "sqlite://"
        return f"sqlite:///{self.path}"

    @property
    def is_sqlite(self) -> bool:
        return self.connection_string.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        return self.connection_string in ("sqlite://", "sqlite:///:memory:")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=8080, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        host = "localhost" if self.host == "0.0.0.0" else self.host
        return f"http://{host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
