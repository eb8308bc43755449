"""
Data Models

Pydantic models for auction views, stored properties and ATTOM payloads.
"""
from src.subasta.models.auction import AuctionEvent, AuctionProperty
from src.subasta.models.property import (
    PropertyDraft,
    PropertyFilters,
    PropertyImage,
    PropertyView,
)
from src.subasta.models.attom import AttomProperty, AttomResponse

__all__ = [
    "AuctionEvent",
    "AuctionProperty",
    "PropertyDraft",
    "PropertyFilters",
    "PropertyImage",
    "PropertyView",
    "AttomProperty",
    "AttomResponse",
]
