"""Configuration template substitution utilities."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.books_api.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
)
from src.books_api.runtime.config.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional, default used when unset or empty
    - ${VAR_NAME:?error_message} - required and non-empty, with custom error message
    """
    env = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return env.get(var_name) or default

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = env.get(var_name)
            if not value:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = env.get(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def environment_overrides(env_mode: str, environ: Mapping[str, str]) -> dict[str, str]:
    """Return ``environ`` with ``<ENV>_NAME`` variables applied over ``NAME``."""
    prefix = f"{env_mode.upper()}_"
    merged = dict(environ)
    for var_name, value in environ.items():
        if value and var_name.startswith(prefix) and len(var_name) > len(prefix):
            merged[var_name[len(prefix):]] = value
            logger.debug("Using {} for {}", var_name, var_name[len(prefix):])
    return merged


def load_templated_yaml(
    file_path: Path, environ: Mapping[str, str] | None = None
) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        environ: Variables to substitute from, defaults to the process environment

    Returns:
        Parsed and validated configuration

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path, encoding="utf-8") as f:
        content = f.read()

    env = dict(os.environ if environ is None else environ)
    env_mode = env.get("APP_ENVIRONMENT") or "development"
    logger.debug("Loading configuration {} for environment: {}", file_path, env_mode)

    substituted_content = substitute_env_vars(
        content, environment_overrides(env_mode, env)
    )

    try:
        loaded = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file {file_path} must contain a mapping")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def config_from_environment(env_vars: EnvironmentVariables) -> ConfigData:
    """Build configuration from environment variables alone."""
    return ConfigData(
        app=AppConfig(environment=env_vars.environment),
        database=DatabaseConfig(path=env_vars.db_path),
        logging=LoggingConfig(level=env_vars.log_level),
    )


def load_default_config() -> ConfigData:
    """Load config.yaml when present, otherwise fall back to the environment."""
    env_vars = EnvironmentVariables()
    config_path = Path(env_vars.config_file)
    if config_path.exists():
        return load_templated_yaml(config_path)

    logger.debug("{} not found; configuring from environment", config_path)
    return config_from_environment(env_vars)
