"""
Key-value store adapter over the ``kv_entries`` table.

A ``KeyValueStore`` is bound to one session and one bucket.  Writes run
inside the session's transaction but only become durable when the session
commits, so several ``put`` calls followed by one ``commit`` succeed or fail
together.  ``put`` is an upsert: two requests racing to create the same key
both succeed and the last one to commit wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import KVEntry
from utils.errors import KeyNotFoundError, StoreError

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class KeyValueStore:
    def __init__(self, session: AsyncSession, bucket: str) -> None:
        self.session = session
        self.bucket = bucket

    async def get(self, key: str) -> bytes:
        """Return the value stored under *key*; raise ``KeyNotFoundError`` if absent."""
        try:
            result = await self.session.execute(
                select(KVEntry.value).where(
                    KVEntry.bucket == self.bucket,
                    KVEntry.key == key,
                )
            )
            value = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to read {self.bucket}{key}: {exc}") from exc
        if value is None:
            raise KeyNotFoundError(key)
        return value

    async def put(self, key: str, value: bytes) -> None:
        """Insert or overwrite *key*."""
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreError(f"unsupported database dialect: {dialect}")

        now = datetime.now(timezone.utc)
        stmt = insert(KVEntry).values(
            bucket=self.bucket,
            key=key,
            value=value,
            updated_at=now,
        ).on_conflict_do_update(
            index_elements=["bucket", "key"],
            set_={"value": value, "updated_at": now},
        )
        try:
            await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to write {self.bucket}{key}: {exc}") from exc
        logger.debug("put %s%s (%d bytes)", self.bucket, key, len(value))

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(f"failed to commit {self.bucket}: {exc}") from exc
