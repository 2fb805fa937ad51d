"""Books API.

A small CRUD service for a ``books`` resource backed by SQLModel over SQLite.
It includes configuration loading, logging, the HTTP application and an
operator CLI.
"""

__version__ = "0.1.0"
