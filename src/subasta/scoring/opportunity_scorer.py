"""
Opportunity scoring for auction properties.

Turns discount depth and the lien-to-value ratio into the 1-5 star rating
shown throughout the listing UI.
"""
from typing import Optional

MIN_SCORE = 1
MAX_SCORE = 5

DEEP_DISCOUNT_PCT = 40
GOOD_DISCOUNT_PCT = 25
PREMIUM_MARKET_VALUE = 300000
LOW_LIEN_RATIO = 0.5
FAIR_LIEN_RATIO = 0.7


def calculate_opportunity_score(
    discount: float,
    market_value: Optional[float],
    foreclosure_amount: Optional[float],
) -> int:
    """
    Score an auction opportunity from 1 (weak) to 5 (exceptional).

    Args:
        discount: Discount versus market value, in percent
        market_value: Market value of the property
        foreclosure_amount: Amount owed at foreclosure

    Returns:
        Integer score in [1, 5]
    """
    score = MIN_SCORE

    if discount > DEEP_DISCOUNT_PCT:
        score += 2
    elif discount > GOOD_DISCOUNT_PCT:
        score += 1

    if market_value and market_value > PREMIUM_MARKET_VALUE:
        score += 1

    # No usable value means no ratio bonus.
    if market_value and market_value > 0:
        ratio = max(foreclosure_amount or 0, 0) / market_value
        if ratio < LOW_LIEN_RATIO:
            score += 2
        elif ratio < FAIR_LIEN_RATIO:
            score += 1

    return min(score, MAX_SCORE)


class OpportunityScorer:
    """Callable-object wrapper so the scorer can be swapped in the transformer."""

    def score(
        self,
        discount: float,
        market_value: Optional[float],
        foreclosure_amount: Optional[float],
    ) -> int:
        return calculate_opportunity_score(discount, market_value, foreclosure_amount)
