"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints. Responses use
camelCase keys for the web client.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.subasta.models.property import CamelModel, PropertyView


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str
    timestamp: datetime


class CountyCount(CamelModel):
    """Number of listed properties in one county."""
    county: str
    properties_count: int


class SavedPropertyView(CamelModel):
    """A favorite together with its property."""
    id: int
    user_id: int
    property_id: int
    created_at: datetime
    property: PropertyView


class FavoriteToggle(CamelModel):
    """Result of toggling a favorite."""
    property_id: int
    saved: bool


class SyncResultResponse(CamelModel):
    """Counters from a sync run."""
    added: int
    updated: int
    errors: int
    total_processed: int


class SyncTriggerResponse(CamelModel):
    """Manual sync trigger response."""
    message: str
    result: SyncResultResponse


class SyncRunView(CamelModel):
    """One recorded sync run."""
    id: int
    sync_type: str
    status: str
    records_processed: int
    records_inserted: int
    records_updated: int
    records_failed: int
    error_message: Optional[str] = None
    started_at: datetime
    completed_at: Optional[datetime] = None


class SyncStatus(CamelModel):
    """Scheduler and last-run information for the admin panel."""
    running: bool
    schedule: str
    job_name: str
    last_run: Optional[SyncRunView] = None
