"""Database CLI commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from src.books_api.core.services import BookService, DbManageService, DbSessionService

from .utils import console, load_config

db_app = typer.Typer(help="🗄️  Database commands")

DB_PATH_OPTION = typer.Option(
    None, "--db-path", help="SQLite file to use instead of the configured one"
)


@db_app.command(name="init")
def init_db(
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Insert the sample books"),
    db_path: str | None = DB_PATH_OPTION,
) -> None:
    """Create the books table and seed it when empty."""
    config = load_config(db_path)
    database_service = DbSessionService(config.database)
    try:
        inserted = DbManageService(database_service).init_db(seed=seed)
    finally:
        database_service.dispose()

    console.print(
        Panel.fit(
            f"[bold green]Database ready[/bold green] at {config.database.connection_string}\n"
            f"Sample books inserted: {inserted}",
            border_style="green",
        )
    )


@db_app.command(name="list")
def list_books(db_path: str | None = DB_PATH_OPTION) -> None:
    """Print every stored book."""
    config = load_config(db_path)
    database_service = DbSessionService(config.database)
    try:
        DbManageService(database_service).create_all()
        books = BookService(database_service).list_books()
    finally:
        database_service.dispose()

    table = Table(title=f"Books ({len(books)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("ISBN", style="magenta")
    table.add_column("Year", justify="right")
    for book in books:
        table.add_row(str(book.id), book.title, book.author, book.isbn, str(book.year))
    console.print(table)
