"""
API Package

FastAPI application exposing auction calendars, property listings,
favorites and the admin sync surface.
"""
