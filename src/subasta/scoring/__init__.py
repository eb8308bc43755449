"""
Scoring Module

Opportunity scoring for auction properties.
"""
from src.subasta.scoring.opportunity_scorer import (
    OpportunityScorer,
    calculate_opportunity_score,
)

__all__ = [
    "OpportunityScorer",
    "calculate_opportunity_score",
]
