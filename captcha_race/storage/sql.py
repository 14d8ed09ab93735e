"""SQL-backed key-value store built on SQLModel."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..core.errors import StorageUnavailable
from ..core.time import utcnow
from ..models.kv import KVRecord
from .base import KeyValueStore

logger = logging.getLogger(__name__)


class SQLKeyValueStore(KeyValueStore):
    """Stores each key as one ``kv_record`` row."""

    name = "sqlite"

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        url = make_url(database_url)
        connect_args = {}
        if url.get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
        else:
            self.name = url.get_backend_name()
        self._url = url
        self.engine = create_engine(database_url, connect_args=connect_args)

    def setup(self) -> None:
        database = self._url.database
        if self._url.get_backend_name() == "sqlite" and database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        try:
            SQLModel.metadata.create_all(self.engine, tables=[KVRecord.__table__])
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Could not prepare {self.name} store: {exc}") from exc
        logger.info("Key-value table ready on %s store", self.name)

    def get(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                record = session.get(KVRecord, key)
                return record.value if record else None
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Could not read {key!r}: {exc}") from exc

    def put(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                record = session.get(KVRecord, key)
                if record:
                    record.value = value
                    record.updated_at = utcnow()
                else:
                    record = KVRecord(key=key, value=value)
                session.add(record)
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Could not write {key!r}: {exc}") from exc

    def close(self) -> None:
        self.engine.dispose()


__all__ = ["SQLKeyValueStore"]
