"""
Storage Repository - Data access for persisted key/value items.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from models.entities import StoredItem


class StorageRepository:
    """Repository for key/value database operations."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db

    def get(self, key: str) -> Optional[str]:
        """
        Get the stored value for a key.

        Args:
            key: The storage key

        Returns:
            The raw stored string, or None if nothing is stored
        """
        record = self.get_record(key)
        return record.Value if record else None

    def get_record(self, key: str) -> Optional[StoredItem]:
        """Get the raw database record for a key."""
        return self.db.query(StoredItem).filter(
            StoredItem.StorageKey == key
        ).first()

    def save(self, key: str, value: str) -> StoredItem:
        """
        Save a value (upsert).

        Args:
            key: The storage key
            value: Serialized value to store

        Returns:
            The saved StoredItem entity
        """
        record = self.get_record(key)

        if record:
            record.Value = value
            record.UpdatedAt = datetime.utcnow()
        else:
            record = StoredItem(StorageKey=key, Value=value)
            self.db.add(record)

        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, key: str) -> bool:
        """
        Delete a stored value.

        Returns:
            True if deleted, False if not found
        """
        result = self.db.query(StoredItem).filter(
            StoredItem.StorageKey == key
        ).delete()
        self.db.commit()
        return result > 0
