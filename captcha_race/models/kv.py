"""Database model for the SQL key-value store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Text
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class KVRecord(SQLModel, table=True):
    """One key holding one whole serialized value."""

    __tablename__ = "kv_record"

    key: str = ORMField(primary_key=True, max_length=512)
    value: str = ORMField(sa_column=Column(Text, nullable=False))
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["KVRecord"]
