"""
Key-value collections backed by SQLite.

``KeyValueStore`` maps a text key to a pydantic record stored as JSON
in one of the tables created by ``core.db``.  ``Storage`` bundles the
four collections the registry owns and is passed into the services at
construction, so separate registries never share state unless they
point at the same database file.

Every method opens its own connection and commits before returning.
Writes to an existing key replace the record (last write wins) but keep
the row's original position, so ``values`` reflects first-insertion
order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from .db import get_connection, get_database_path, init_db
from ..schemas.enquiry import EnquiryRead
from ..schemas.product import ProductRead
from ..schemas.question import QuestionRead
from ..schemas.user import UserRead

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class KeyValueStore(Generic[RecordT]):
    """A persistent map from text keys to records of one model type."""

    def __init__(self, db_path: str, table: str, model: Type[RecordT]) -> None:
        self.db_path = db_path
        self.table = table
        self.model = model

    def get(self, key: str) -> Optional[RecordT]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT value FROM {self.table} WHERE key = ?",
                (key,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return self.model.model_validate_json(row["value"])

    def contains(self, key: str) -> bool:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT 1 FROM {self.table} WHERE key = ?",
                (key,),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def insert(self, key: str, record: RecordT) -> None:
        """Store ``record`` under ``key``, replacing any previous value."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                f"""
                INSERT INTO {self.table} (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, record.model_dump_json()),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> bool:
        """Delete ``key``.  Returns ``True`` if a record was removed."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def values(self) -> List[RecordT]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(f"SELECT value FROM {self.table} ORDER BY rowid ASC").fetchall()
        finally:
            conn.close()
        return [self.model.model_validate_json(row["value"]) for row in rows]

    def __len__(self) -> int:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(f"SELECT COUNT(*) AS count FROM {self.table}").fetchone()
            return row["count"]
        finally:
            conn.close()

    def __repr__(self) -> str:
        return f"KeyValueStore(table={self.table!r}, db_path={self.db_path!r})"


@dataclass
class Storage:
    """The four collections owned by one registry."""

    db_path: str
    users: KeyValueStore[UserRead]
    products: KeyValueStore[ProductRead]
    enquiries: KeyValueStore[EnquiryRead]
    questions: KeyValueStore[QuestionRead]

    @classmethod
    def at(cls, db_path: str) -> "Storage":
        """Bind the collections to ``db_path`` without touching the file."""
        return cls(
            db_path=db_path,
            users=KeyValueStore(db_path, "users", UserRead),
            products=KeyValueStore(db_path, "products", ProductRead),
            enquiries=KeyValueStore(db_path, "enquiries", EnquiryRead),
            questions=KeyValueStore(db_path, "questions", QuestionRead),
        )

    @classmethod
    def open(cls, database_url: Optional[str] = None) -> "Storage":
        """Resolve ``database_url``, apply migrations and bind the collections."""
        db_path = get_database_path(database_url)
        init_db(db_path)
        logger.debug("Opened registry storage at %s", db_path)
        return cls.at(db_path)

    def initialise(self) -> None:
        init_db(self.db_path)
