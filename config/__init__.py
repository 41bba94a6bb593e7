"""
Config Package - Application configuration and database setup.
"""

from config.settings import Settings, get_settings
from config.database import SessionLocal, Base, engine, init_db

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Database
    "SessionLocal",
    "Base",
    "engine",
    "init_db",
]
