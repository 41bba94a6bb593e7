"""
SQLAlchemy ORM Entity Models

The app keeps its durable client state in a single key/value table,
playing the part of the browser's localStorage. Values are JSON
documents; the history log is one row under a fixed key.
"""

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func

from config.database import Base


class StoredItem(Base):
    """
    One persisted value addressed by a storage key.

    Writes replace the whole value, so readers always see the last
    complete document that was saved.
    """
    __tablename__ = "StoredItems"

    StorageKey = Column(String(100), primary_key=True)
    Value = Column(Text, nullable=False)
    UpdatedAt = Column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )
