"""
Tu Casa en Subasta - Core Package

Auction listing core: deterministic auction calendars, opportunity scoring and
the ATTOM property data synchronization pipeline.
"""

__version__ = "0.1.0"
