"""
ATTOM Record Transformer

Converts ATTOM property records into the internal property draft stored by
the sync pipeline.
"""
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from src.subasta.exceptions import TransformError
from src.subasta.models.attom import AttomProperty
from src.subasta.models.property import PropertyDraft
from src.subasta.scoring.opportunity_scorer import OpportunityScorer
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_PRICE = 200000
DEFAULT_LIEN_RATIO = 0.7
OPENING_BID_RATIO = 0.85
MIN_REPORTED_DISCOUNT = 15
DEFAULT_BEDROOMS = 3
DEFAULT_BATHROOMS = 2
DEFAULT_SQFT = 1500
AUCTION_WINDOW_DAYS = 90


def property_type_for_size(size: Optional[float]) -> str:
    """
    Coarse listing label from building size in square feet.

    Args:
        size: Building size (sqft)

    Returns:
        Condominio, Casa, Casa Grande or Casa de Lujo
    """
    if not size:
        return "Casa"
    if size < 800:
        return "Condominio"
    if size < 1500:
        return "Casa"
    if size < 2500:
        return "Casa Grande"
    return "Casa de Lujo"


def parse_auction_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ATTOM ISO timestamp, returning None when absent."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (40.5 -> 41, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def random_future_date(days: int = AUCTION_WINDOW_DAYS) -> datetime:
    """Now plus a uniformly random offset of up to ``days`` days (unseeded)."""
    return datetime.now(timezone.utc) + timedelta(seconds=random.random() * days * 86400)


class AttomPropertyTransformer:
    """
    Transforms ATTOM property records into PropertyDraft instances.

    Pricing rules:
        base price   = assessed market value, else AVM value, else 200,000
        lien amount  = foreclosure amount, else 70% of base price
        discount     = 1 - lien / base, reported as at least 15%
        opening bid  = 85% of the lien amount
    """

    def __init__(self, scorer: Optional[OpportunityScorer] = None):
        self.scorer = scorer or OpportunityScorer()

    def transform(
        self,
        record: Union[AttomProperty, Dict[str, Any]],
        fallback_index: int = 0,
    ) -> PropertyDraft:
        """
        Convert one external record.

        Args:
            record: ATTOM record (model or raw JSON dict)
            fallback_index: Identifier used when the record carries none

        Returns:
            PropertyDraft ready for storage

        Raises:
            TransformError: If the record is malformed
        """
        try:
            if not isinstance(record, AttomProperty):
                record = AttomProperty.model_validate(record)
            return self._build_draft(record, fallback_index)
        except (ValidationError, ValueError, TypeError, ZeroDivisionError) as e:
            logger.warning(
                "attom_record_transform_failed",
                fallback_index=fallback_index,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransformError(f"Cannot transform ATTOM record {fallback_index}: {e}") from e

    def _build_draft(self, record: AttomProperty, fallback_index: int) -> PropertyDraft:
        base_price = record.market_value or record.avm_value or DEFAULT_BASE_PRICE
        foreclosure = record.foreclosure
        foreclosure_amount = (foreclosure.amount if foreclosure else None) or base_price * DEFAULT_LIEN_RATIO

        raw_discount = round_half_up((1 - foreclosure_amount / base_price) * 100)
        score = self.scorer.score(raw_discount, base_price, foreclosure_amount)

        address = record.address
        building = record.building
        size = building.size if building else None
        rooms = building.rooms if building else None
        construction = building.construction if building else None
        identifier = record.identifier

        auction_date = parse_auction_date(foreclosure.date if foreclosure else None)

        lot_size = record.lot.lot_size1 if record.lot else None
        sqft = ((size.living_size or size.bldg_size) if size else None) or DEFAULT_SQFT
        external_id = identifier.id if identifier and identifier.id is not None else fallback_index

        return PropertyDraft(
            address=(address.one_line if address else None) or "Address not available",
            city=(address.locality if address else None) or "Unknown",
            state=(address.state if address else None) or "Unknown",
            zip_code=(address.postal1 if address else None) or "00000",
            county=(identifier.fips if identifier else None) or "Unknown",
            property_type=property_type_for_size(size.bldg_size if size else None),
            bedrooms=(rooms.beds if rooms else None) or DEFAULT_BEDROOMS,
            bathrooms=(rooms.baths if rooms else None) or DEFAULT_BATHROOMS,
            sqft=max(int(sqft), 0),
            lot_size=str(int(lot_size)) if lot_size and lot_size > 0 else None,
            year_built=construction.year_built if construction else None,
            original_price=round_half_up(base_price),
            market_value=round_half_up(base_price),
            lien_amount=round_half_up(foreclosure_amount),
            auction_price=round_half_up(foreclosure_amount * OPENING_BID_RATIO),
            discount=max(raw_discount, MIN_REPORTED_DISCOUNT),
            opportunity_score=score,
            auction_type=(foreclosure.type if foreclosure else None) or "foreclosure",
            auction_date=auction_date or random_future_date(),
            trustee_phone=foreclosure.trustee_phone if foreclosure else None,
            external_id=str(external_id),
        )
