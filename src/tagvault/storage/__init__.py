"""Storage layer for tagvault - SQLite database and repositories."""

from tagvault.storage.db import get_connection, init_db
from tagvault.storage.repos import TagsRepo

__all__ = [
    "get_connection",
    "init_db",
    "TagsRepo",
]
