"""
Auction Property Roster

Assigns stored properties to an auction event and decorates them with
auction-specific figures. The figures are derived from a seed built from the
event id and auction date, so the same auction always shows the same roster.
"""
import math
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from src.subasta.generation.seeded_random import seeded_random
from src.subasta.models.auction import AuctionProperty
from src.subasta.models.property import PropertyView

DEFAULT_AUCTION_DATE = "2025-07-29"

MIN_ROSTER_SIZE = 5
ROSTER_SPREAD = 8

SCORE_OFFSET = 100
LIEN_OFFSET = 200
BID_OFFSET = 300

KEVIN_NOTES = [
    "Requiere inspección detallada. Posible problema estructural.",
    "Buena oportunidad pero verificar títulos y gravámenes.",
    "Propiedad sólida con potencial de revalorización moderada.",
    "Excelente inversión. Ubicación premium y condición favorable.",
    "Oportunidad excepcional. Máxima prioridad para inversión.",
]


def kevin_notes(opportunity_score: int) -> str:
    """Advisor note for a 1-5 score; out-of-range scores get the neutral note."""
    if 1 <= opportunity_score <= len(KEVIN_NOTES):
        return KEVIN_NOTES[opportunity_score - 1]
    return KEVIN_NOTES[2]


def epoch_millis(value: str) -> int:
    """
    Milliseconds since the epoch for an ISO date or datetime string.

    Values without an offset are read as UTC.

    Raises:
        ValueError: If the string is not ISO formatted
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def auction_seed(event_id: int, auction_date: Optional[str]) -> int:
    return event_id * 1000 + epoch_millis(auction_date or DEFAULT_AUCTION_DATE)


def enrich_auction_properties(
    event_id: int,
    auction_date: Optional[str],
    candidates: Sequence[Any],
) -> List[AuctionProperty]:
    """
    Build the property roster for one auction event.

    Candidates are used in the order given; callers pass them sorted by
    discount descending. An empty candidate pool yields an empty roster.

    Args:
        event_id: Auction event id from the calendar
        auction_date: ISO date of the auction (None uses a fixed default)
        candidates: Stored properties (ORM rows, PropertyView or dicts)

    Returns:
        Between 5 and 12 properties, fewer if the pool is smaller
    """
    seed = auction_seed(event_id, auction_date)
    roster_size = int(seeded_random(seed, 1) * ROSTER_SPREAD) + MIN_ROSTER_SIZE

    roster: List[AuctionProperty] = []
    for idx, candidate in enumerate(candidates[:roster_size]):
        base = PropertyView.model_validate(candidate)
        score = int(seeded_random(seed, idx + SCORE_OFFSET) * 5) + 1
        bid_factor = 0.7 + seeded_random(seed, idx + BID_OFFSET) * 0.2

        roster.append(
            AuctionProperty(
                **{
                    **base.model_dump(),
                    "auction_event_id": event_id,
                    "opportunity_score": score,
                    "auction_date": auction_date,
                    "lien_amount": int(seeded_random(seed, idx + LIEN_OFFSET) * 50000) + 10000,
                    "estimated_value": base.market_value or base.original_price,
                    "opening_bid": math.floor((base.auction_price or 0) * bid_factor),
                    "kevin_notes": kevin_notes(score),
                }
            )
        )

    return roster
