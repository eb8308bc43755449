"""
Database Package

Database models, connection management, and data persistence layer.
"""
from src.subasta.db.base import Base
from src.subasta.db.session import (
    engine,
    SessionLocal,
    get_db_session,
    get_db,
    health_check,
    create_all_tables,
)
from src.subasta.db.models import Property, SavedProperty, SyncRun
from src.subasta.db.repository import (
    BaseRepository,
    PropertyRepository,
    SavedPropertyRepository,
    SyncRunRepository,
)

__all__ = [
    # Base
    "Base",
    # Session management
    "engine",
    "SessionLocal",
    "get_db_session",
    "get_db",
    "health_check",
    "create_all_tables",
    # Models
    "Property",
    "SavedProperty",
    "SyncRun",
    # Repositories
    "BaseRepository",
    "PropertyRepository",
    "SavedPropertyRepository",
    "SyncRunRepository",
]
