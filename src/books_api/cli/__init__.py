"""Main CLI application module."""

import typer

from .db_commands import db_app
from .server_commands import server_app

app = typer.Typer(
    help="📚 Books API CLI - run, initialize and check the books service",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(server_app, name="server")
app.add_typer(db_app, name="db")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
