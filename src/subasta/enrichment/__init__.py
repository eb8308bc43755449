"""
Enrichment Package

Street View imagery for synced properties.
"""
from src.subasta.enrichment.image_enricher import PropertyImageEnricher
from src.subasta.enrichment.street_view import StreetViewClient

__all__ = [
    "PropertyImageEnricher",
    "StreetViewClient",
]
