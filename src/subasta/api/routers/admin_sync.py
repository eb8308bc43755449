"""
Admin Sync Router

Manual trigger and status of the ATTOM property sync.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.subasta.api.dependencies import get_db, get_property_sync
from src.subasta.api.schemas import SyncStatus, SyncTriggerResponse
from src.subasta.sync.property_sync import PropertyDataSync
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin/sync", tags=["admin"])


@router.post("/trigger", response_model=SyncTriggerResponse)
def trigger_sync(sync: PropertyDataSync = Depends(get_property_sync)):
    """
    Run the daily sync now and wait for it to finish.

    Responds 409 while another sync is running and 503 when the ATTOM key
    is not configured.
    """
    logger.info("manual_sync_triggered")
    result = sync.perform_daily_sync(sync_type="manual_sync")
    return SyncTriggerResponse(
        message="Sync completed",
        result=result.to_dict(),
    )


@router.get("/status", response_model=SyncStatus)
def sync_status(
    sync: PropertyDataSync = Depends(get_property_sync),
    db: Session = Depends(get_db),
):
    """Scheduler configuration, running flag and the latest recorded run."""
    return sync.get_sync_status(db)
