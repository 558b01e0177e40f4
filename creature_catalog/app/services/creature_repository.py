"""
Persistence gateway for creature records.

``CreatureRepository`` is a thin wrapper around the ``creatures``
collection: insert, point lookups by ``no``, ``id`` and ``name``,
update/delete by ``id`` and an ordered page query.  It is the only
place that talks to the store and therefore the only place where store
errors are interpreted.  A unique-index violation becomes a
:class:`DuplicateKey` naming the colliding fields; anything else is
logged with its traceback and becomes :class:`Unavailable`.

All queries use parameterized statements.  Column names that end up in
SQL text are checked against ``COLUMNS`` first.
"""

from __future__ import annotations

import logging
import re
import sqlite3
import uuid
from typing import Any, Dict, Iterator, Optional

from creature_catalog.app.core.db import get_cursor
from creature_catalog.app.core.errors import DuplicateKey, Result, ServiceError, Unavailable
from creature_catalog.app.schemas.creature import MAX_ORDINAL, Creature
from creature_catalog.app.services.pagination import PageRequest

logger = logging.getLogger(__name__)

COLUMNS = ("id", "name", "no")
UNIQUE_FIELDS = ("name", "no")

_UNIQUE_VIOLATION = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$")


def new_storage_id() -> str:
    """Return a fresh storage identifier (32 lower-case hex characters)."""
    return uuid.uuid4().hex


class CreatureRepository:
    """Store operations for the ``creatures`` collection."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    async def insert(self, name: str, no: int) -> Result[Creature]:
        document = {"id": new_storage_id(), "name": name, "no": no}
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute(
                    "INSERT INTO creatures (id, name, no) VALUES (:id, :name, :no)",
                    document,
                )
        except (sqlite3.Error, OverflowError) as exc:
            return Result.failure(self._store_error("insert", exc, document))
        return Result.success(Creature(**document))

    async def find_by_no(self, no: int) -> Result[Optional[Creature]]:
        return self._find_one("no", no)

    async def find_by_id(self, storage_id: str) -> Result[Optional[Creature]]:
        return self._find_one("id", storage_id)

    async def find_by_name(self, name: str) -> Result[Optional[Creature]]:
        return self._find_one("name", name)

    async def update_by_id(self, storage_id: str, changes: Dict[str, Any]) -> Result[int]:
        """Apply ``changes`` to the creature with ``storage_id``.

        Returns the number of matched rows (0 or 1).  Unknown keys and
        ``id`` are ignored; the storage identifier is immutable.
        """
        values = {k: v for k, v in changes.items() if k in UNIQUE_FIELDS}
        if not values:
            return Result.success(0)
        assignments = ", ".join(f"{column} = :{column}" for column in values)
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute(
                    f"UPDATE creatures SET {assignments} WHERE id = :id",
                    {**values, "id": storage_id},
                )
                matched = cursor.rowcount
        except (sqlite3.Error, OverflowError) as exc:
            return Result.failure(self._store_error("update", exc, values))
        return Result.success(matched)

    async def delete_by_id(self, storage_id: str) -> Result[int]:
        """Delete the creature with ``storage_id`` and return the deleted count."""
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute("DELETE FROM creatures WHERE id = ?", (storage_id,))
                deleted = cursor.rowcount
        except (sqlite3.Error, OverflowError) as exc:
            return Result.failure(self._store_error("delete", exc))
        return Result.success(deleted)

    async def find_page(self, page: PageRequest) -> Result[Iterator[Creature]]:
        """Return one page of creatures ordered by ``page.sort_key`` ascending."""
        if page.sort_key not in COLUMNS:
            raise ValueError(f"Unsupported sort key {page.sort_key!r}")
        # SQLite spells "no limit" as a negative LIMIT. Nothing sits past
        # the largest storable integer, so bigger bounds need no query.
        limit = -1 if page.unbounded or page.limit > MAX_ORDINAL else page.limit
        if page.offset > MAX_ORDINAL:
            return Result.success(iter(()))
        try:
            with get_cursor(self.database_url) as cursor:
                rows = cursor.execute(
                    f"SELECT id, name, no FROM creatures ORDER BY {page.sort_key} ASC LIMIT ? OFFSET ?",
                    (limit, page.offset),
                ).fetchall()
        except (sqlite3.Error, OverflowError) as exc:
            return Result.failure(self._store_error("find_page", exc))
        return Result.success(self._row_to_creature(row) for row in rows)

    def _find_one(self, column: str, value: Any) -> Result[Optional[Creature]]:
        if column not in COLUMNS:
            raise ValueError(f"Unsupported lookup column {column!r}")
        try:
            with get_cursor(self.database_url) as cursor:
                row = cursor.execute(
                    f"SELECT id, name, no FROM creatures WHERE {column} = ?",
                    (value,),
                ).fetchone()
        except (sqlite3.Error, OverflowError) as exc:
            return Result.failure(self._store_error(f"find_by_{column}", exc))
        return Result.success(self._row_to_creature(row) if row else None)

    @staticmethod
    def _store_error(
        operation: str, exc: Exception, document: Optional[Dict[str, Any]] = None
    ) -> ServiceError:
        """Translate a store exception into a service error value."""
        if isinstance(exc, sqlite3.IntegrityError) and document is not None:
            match = _UNIQUE_VIOLATION.search(str(exc))
            if match:
                columns = [c.strip().split(".")[-1] for c in match.group("columns").split(",")]
                fields = {c: document[c] for c in columns if c in UNIQUE_FIELDS and c in document}
                if fields:
                    logger.info("Rejected duplicate creature on %s: %s", operation, fields)
                    return DuplicateKey(fields=fields)
        logger.exception("Creature store operation %s failed", operation, exc_info=exc)
        return Unavailable()

    @staticmethod
    def _row_to_creature(row: sqlite3.Row) -> Creature:
        """Convert a database row to a ``Creature`` schema instance."""
        return Creature(id=row["id"], name=row["name"], no=row["no"])
