"""
Repositories - Data access layer for database operations.
"""

from models.repositories.storage_repository import StorageRepository

__all__ = ["StorageRepository"]
