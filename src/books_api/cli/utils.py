from rich.console import Console

from src.books_api.runtime.config.config_data import ConfigData
from src.books_api.runtime.context import get_config

console = Console()


def load_config(db_path: str | None = None) -> ConfigData:
    """Return the current configuration, optionally pointing at another database file."""
    config = get_config()
    if db_path is None:
        return config
    return config.model_copy(
        update={"database": config.database.model_copy(update={"path": db_path})}
    )
