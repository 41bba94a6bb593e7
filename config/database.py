"""
Database setup - SQLAlchemy engine, session factory and declarative base.

The database plays the role of the browser's local storage: a small
key/value table that survives restarts.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import get_settings

settings = get_settings()

# SQLite connections are handed between Streamlit script threads
connect_args = (
    {"check_same_thread": False}
    if settings.database_url.startswith("sqlite")
    else {}
)

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db():
    """Create any missing tables."""
    # Entities must be imported so they register on Base.metadata
    import models.entities  # noqa: F401

    Base.metadata.create_all(bind=engine)
