"""
SQLAlchemy ORM models.

The service treats the database as a key-value store: one ``kv_entries``
table partitioned into named buckets (``/data`` for profiles,
``/usersdata`` for the auth service's user records).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class KVEntry(Base):
    __tablename__ = "kv_entries"

    bucket = Column(String(128), primary_key=True)
    key = Column(String(512), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
