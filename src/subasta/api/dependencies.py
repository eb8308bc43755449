"""
FastAPI Dependencies

Provides dependency injection for database sessions, the sync orchestrator
and the caller identity.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException

from src.subasta.db.session import get_db
from src.subasta.sync.property_sync import PropertyDataSync

__all__ = ["get_db", "get_property_sync", "get_current_user_id"]


@lru_cache()
def get_property_sync() -> PropertyDataSync:
    """Process-wide sync orchestrator."""
    return PropertyDataSync()


def get_current_user_id(x_user_id: Optional[int] = Header(None)) -> int:
    """
    Caller identity forwarded by the upstream auth layer.

    Raises:
        HTTPException: 401 if the X-User-Id header is missing
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id
