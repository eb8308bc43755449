"""
Auction Data Models

Request-scoped views produced by the seeded generators. Nothing here is
persisted.
"""
from typing import Literal, Optional

from pydantic import Field

from src.subasta.models.property import CamelModel, PropertyView

AuctionType = Literal["foreclosure", "bankruptcy", "tax"]


class AuctionEvent(CamelModel):
    """
    One auction on the monthly calendar.

    Attributes:
        id: stateIndex * 10 + eventIndex within the state
        date: ISO date (YYYY-MM-DD)
        state: Two-letter state code
        city: City hosting the auction
        auction_type: foreclosure, bankruptcy or tax
        time: Start time (HH:MM)
        properties_count: Advertised number of properties
    """

    id: int
    date: str
    state: str
    city: str
    auction_type: AuctionType
    time: str
    properties_count: int = Field(..., ge=5, le=19)


class AuctionProperty(PropertyView):
    """A stored property as listed at one specific auction event."""

    auction_event_id: int
    opportunity_score: int = Field(..., ge=1, le=5)
    auction_date: Optional[str] = None
    lien_amount: int
    estimated_value: Optional[float] = None
    bid_increment: int = 1000
    opening_bid: int
    kevin_notes: str
