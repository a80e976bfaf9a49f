"""
SQLite database integration and simple migration system.

Each registry collection (users, products, enquiries, questions) is a
two-column table holding a text key and a JSON-encoded record.  This
module resolves the database path, opens connections and applies
migrations; the key-value API on top of these tables lives in
``core.storage``.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import List, Optional, Tuple

from .config import settings

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "products", "enquiries", "questions")

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: one key-value table per collection
    (
        1,
        "\n".join(
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            """
            for table in COLLECTIONS
        ),
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured URL is an absolute path it is used directly;
    otherwise it is resolved relative to the ``exhibition_api`` package
    directory.  ``:memory:`` is not supported because every store
    operation opens its own connection.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # exhibition_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory so columns can be accessed by
    name.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Optional[str] = None) -> None:
    """Create the database if needed and apply pending migrations.

    Safe to call repeatedly; only migrations with a version greater than
    the highest applied one are executed.
    """
    path = db_path or get_database_path()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(path)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS migrations (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current = row["version"] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            cursor.executescript(script)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            conn.commit()
            logger.info("Applied migration %s to %s", version, path)
    finally:
        conn.close()
