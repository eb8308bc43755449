"""
Seeded Generators

Deterministic auction calendars and per-auction property rosters.
"""
from src.subasta.generation.seeded_random import seeded_random
from src.subasta.generation.auction_events import generate_auction_events
from src.subasta.generation.auction_properties import enrich_auction_properties, kevin_notes

__all__ = [
    "seeded_random",
    "generate_auction_events",
    "enrich_auction_properties",
    "kevin_notes",
]
