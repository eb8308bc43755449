"""
Clients Package

HTTP clients for external property data sources.
"""
from src.subasta.clients.attom_client import AttomClient

__all__ = [
    "AttomClient",
]
