"""SQLite tag database: opening connections and applying schema migrations."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from tagvault.core.config import DATABASE_PATH

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def _resolve(db_path: Path | str | None) -> Path:
    return Path(db_path) if db_path else DATABASE_PATH


def _connect(path: Path) -> sqlite3.Connection:
    # Cascading deletes of child tags rely on foreign keys being enforced
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def _pending_migrations(conn: sqlite3.Connection) -> list[Path]:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS _migrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            applied_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)
    applied = {row["name"] for row in conn.execute("SELECT name FROM _migrations")}
    return [
        script
        for script in sorted(MIGRATIONS_DIR.glob("*.sql"))
        if script.name not in applied
    ]


def _run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations in file name order and return their names."""
    names = []
    for script in _pending_migrations(conn):
        logger.debug(f"Applying tag database migration {script.name}")
        conn.executescript(script.read_text(encoding="utf-8"))
        conn.execute("INSERT INTO _migrations (name) VALUES (?)", (script.name,))
        conn.commit()
        names.append(script.name)
    return names


def init_db(db_path: Path | str | None = None) -> list[str]:
    """
    Create the tag database if needed and bring its schema up to date.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)

    Returns:
        Names of the migrations applied by this call, oldest first
    """
    path = _resolve(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = _connect(path)
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        applied = _run_migrations(conn)
    finally:
        conn.close()

    if applied:
        logger.info(f"Tag database {path}: applied {', '.join(applied)}")
    return applied


@contextmanager
def get_connection(
    db_path: Path | str | None = None,
) -> Generator[sqlite3.Connection, None, None]:
    """Open the tag database, committing when the block exits cleanly."""
    conn = _connect(_resolve(db_path))
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
