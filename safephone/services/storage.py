import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safephone.models import StoredItem

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """
    Persistent get/set of opaque string blobs.
    The report store only ever talks to this interface, so tests can
    hand it an in-memory fake.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Stored value, or None when the key was never written"""
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    """Process-local storage (tests, ephemeral sessions)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class SqlStorage(KeyValueStorage):
    """
    SQLAlchemy-backed storage (one row per key in stored_items).
    Blocking session work runs in a worker thread.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    def _get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            item = db.query(StoredItem).filter_by(key=key).first()
            return item.value if item else None
        finally:
            db.close()

    def _set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            existing = db.query(StoredItem).filter_by(key=key).first()
            if existing:
                existing.value = value
                existing.updated_at = datetime.utcnow()
            else:
                db.add(StoredItem(key=key, value=value))
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()
