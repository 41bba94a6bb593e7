"""
Storage Service - durable key/value storage for client state.

Mirrors the browser localStorage API (get_item / set_item / remove_item)
on top of the StoredItems table. Each call opens and closes its own
session so writes are committed before the call returns.
"""

import logging
from typing import Callable, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.database import SessionLocal
from models.repositories.storage_repository import StorageRepository
from services.errors import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class DatabaseStorage:
    """KeyValueStorage backed by SQLAlchemy."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a stored value.

        Raises:
            PersistenceError: if the database cannot be read
        """
        db = self._session_factory()
        try:
            return StorageRepository(db).get(key)
        except SQLAlchemyError as e:
            logger.error(f"Storage read failed for '{key}': {e}")
            raise PersistenceError("Saved history could not be read.") from e
        finally:
            db.close()

    def set_item(self, key: str, value: str):
        """
        Write a value, replacing any previous one.

        Raises:
            PersistenceError: if the write is rejected
        """
        db = self._session_factory()
        try:
            StorageRepository(db).save(key, value)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Storage write failed for '{key}': {e}")
            raise PersistenceError("History could not be saved.") from e
        finally:
            db.close()

    def remove_item(self, key: str):
        """Delete a value if present."""
        db = self._session_factory()
        try:
            StorageRepository(db).delete(key)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Storage delete failed for '{key}': {e}")
            raise PersistenceError("History could not be cleared.") from e
        finally:
            db.close()
