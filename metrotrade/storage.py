"""
Synchronous key-value storage used to persist learned policy tables.

Backends:
- NullStorage: remembers nothing (the default when no backend is configured)
- MemoryStorage: in-process dict, values kept as JSON text
- JsonFileStorage: a single JSON document on disk
- SqlStorage: a SQLAlchemy table, SQLite unless configured otherwise

Backends raise StorageError on failure; callers that must never hard-fail
(the learning agent) catch it and carry on.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from sqlalchemy import JSON, String, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from metrotrade.exceptions import StorageError

if TYPE_CHECKING:
    from metrotrade.settings import MetroTradeSettings

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Abstract synchronous get/set store for JSON-serializable values."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default when absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""


class NullStorage(KeyValueStorage):
    """Storage that silently drops every write."""

    def get(self, key: str, default: Any = None) -> Any:
        return default

    def set(self, key: str, value: Any) -> None:
        return None


class MemoryStorage(KeyValueStorage):
    """In-process storage. Values are round-tripped through JSON so callers never share them."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for {key!r} is not JSON-serializable: {e}") from e

    def keys(self) -> List[str]:
        return sorted(self._data)


class JsonFileStorage(KeyValueStorage):
    """Storage backed by one JSON object in a file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e


class Base(DeclarativeBase):
    """Base class for storage models."""

    pass


class KeyValueEntry(Base):
    """One stored key and its JSON value."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"KeyValueEntry(key={self.key!r})"


class SqlStorage(KeyValueStorage):
    """Storage backed by a SQLAlchemy table."""

    def __init__(self, database_url: str = "sqlite:///metrotrade.db", echo: bool = False):
        try:
            self.engine = create_engine(database_url, echo=echo)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot open database: {e}") from e
        logger.info(f"Key-value store ready at {database_url.split('@')[-1]}")

    def get(self, key: str, default: Any = None) -> Any:
        try:
            with Session(self.engine) as session:
                entry = session.get(KeyValueEntry, key)
                return default if entry is None else entry.value
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot read {key!r}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            with Session(self.engine) as session:
                session.merge(KeyValueEntry(key=key, value=value))
                session.commit()
        except (SQLAlchemyError, TypeError) as e:
            raise StorageError(f"Cannot write {key!r}: {e}") from e

    def close(self) -> None:
        self.engine.dispose()


def build_storage(settings: Optional["MetroTradeSettings"] = None) -> KeyValueStorage:
    """
    Create the storage backend selected in settings.

    Falls back to NullStorage, with a warning, when the configured backend
    cannot be opened.
    """
    if settings is None:
        from metrotrade.settings import get_settings

        settings = get_settings()

    backend = settings.storage_backend
    try:
        if backend == "memory":
            return MemoryStorage()
        if backend == "json":
            return JsonFileStorage(settings.storage_path)
        if backend == "sql":
            return SqlStorage(settings.database_url)
    except StorageError as e:
        logger.warning(f"Storage backend {backend!r} unavailable, learning will not persist: {e}")
    return NullStorage()
