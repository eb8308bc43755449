"""
Sync Package

ATTOM to database property synchronization.
"""
from src.subasta.sync.property_sync import PropertyDataSync, SyncOptions, SyncResult

__all__ = [
    "PropertyDataSync",
    "SyncOptions",
    "SyncResult",
]
