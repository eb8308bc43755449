"""
Auctions Router

Seeded auction calendar and per-auction property rosters. Nothing here is
persisted; the same query always returns the same calendar.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.subasta.api.dependencies import get_db
from src.subasta.db.repository import PropertyRepository
from src.subasta.generation import enrich_auction_properties, generate_auction_events
from src.subasta.models.auction import AuctionEvent, AuctionProperty
from src.subasta.models.property import PropertyFilters
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auctions"])

AUCTION_POOL_SIZE = 50


@router.get("/auction-events", response_model=List[AuctionEvent])
def list_auction_events(
    state: Optional[str] = Query(None, min_length=2, max_length=2, description="Two-letter state code"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Calendar year (defaults to current)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Calendar month (defaults to current)"),
):
    """
    Upcoming auctions for one month.

    Args:
        state: Optional state filter
        year: Calendar year
        month: Calendar month

    Returns:
        Events sorted by date, past dates omitted

    Raises:
        HTTPException: 400 on an invalid year/month combination
    """
    try:
        return generate_auction_events(state=state, year=year, month=month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/auction/{event_id}/properties", response_model=List[AuctionProperty])
def list_auction_properties(
    event_id: int,
    state: Optional[str] = Query(None, min_length=2, max_length=2, description="State of the auction"),
    date: Optional[str] = Query(None, description="Auction date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    """
    Property roster for one auction event.

    The candidate pool is the top properties by discount in the event's
    state, or across all states when the state has none.

    Raises:
        HTTPException: 400 if the date cannot be parsed
    """
    repo = PropertyRepository()
    pool = repo.get_properties(
        db, PropertyFilters(state=state.upper() if state else None, limit=AUCTION_POOL_SIZE)
    )
    if not pool and state:
        logger.info("auction_pool_state_empty", event_id=event_id, state=state)
        pool = repo.get_properties(db, PropertyFilters(limit=AUCTION_POOL_SIZE))

    try:
        return enrich_auction_properties(event_id, date, pool)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
