"""
Properties Router

Property listings, county counts and user favorites.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from src.subasta.api.dependencies import get_current_user_id, get_db
from src.subasta.api.schemas import CountyCount, FavoriteToggle, SavedPropertyView
from src.subasta.db.repository import PropertyRepository, SavedPropertyRepository
from src.subasta.models.property import PropertyFilters, PropertyView

router = APIRouter(prefix="/api", tags=["properties"])


@router.get("/properties", response_model=List[PropertyView])
def list_properties(
    state: Optional[str] = Query(None, description="Filter by state code"),
    county: Optional[str] = Query(None, description="Filter by county"),
    city: Optional[str] = Query(None, description="City substring (case-insensitive)"),
    price_min: Optional[float] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[float] = Query(None, alias="priceMax", ge=0),
    property_types: Optional[List[str]] = Query(None, alias="propertyTypes"),
    auction_types: Optional[List[str]] = Query(None, alias="auctionTypes"),
    min_discount: Optional[int] = Query(None, alias="minDiscount", ge=0, le=100),
    bedrooms: Optional[int] = Query(None, ge=0),
    bathrooms: Optional[float] = Query(None, ge=0),
    sort_by: str = Query("discount", alias="sortBy", pattern="^(discount|price|auction_date|recently_added)$"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    limit: int = Query(50, ge=1, le=1000, description="Number of results to return"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    db: Session = Depends(get_db),
):
    """
    List properties with filters, sorting and pagination.

    Returns:
        Matching properties
    """
    filters = PropertyFilters(
        state=state.upper() if state else None,
        county=county,
        city=city,
        price_min=price_min,
        price_max=price_max,
        property_types=property_types,
        auction_types=auction_types,
        min_discount=min_discount,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )
    return PropertyRepository().get_properties(db, filters)


@router.get("/properties/{property_id}", response_model=PropertyView)
def get_property(property_id: int, db: Session = Depends(get_db)):
    """
    Get a single property.

    Raises:
        HTTPException: 404 if property not found
    """
    property_obj = PropertyRepository().get_by_id(db, property_id)
    if not property_obj:
        raise HTTPException(status_code=404, detail=f"Property not found: {property_id}")
    return property_obj


@router.get("/counties/{state}", response_model=List[CountyCount])
def list_counties(state: str, db: Session = Depends(get_db)):
    """Counties with listed properties in a state, with counts."""
    return PropertyRepository().get_counties_by_state(db, state.upper())


@router.get("/saved-properties", response_model=List[SavedPropertyView])
def list_saved_properties(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Favorites of the calling user, newest first."""
    return SavedPropertyRepository().get_saved_properties(db, user_id)


@router.post("/properties/{property_id}/favorite", response_model=FavoriteToggle)
def toggle_favorite(
    property_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Save the property as favorite, or remove it if already saved.

    Raises:
        HTTPException: 404 if property not found
    """
    if not PropertyRepository().get_by_id(db, property_id):
        raise HTTPException(status_code=404, detail=f"Property not found: {property_id}")

    saved_repo = SavedPropertyRepository()
    if saved_repo.is_property_saved(db, user_id, property_id):
        saved_repo.remove_saved_property(db, user_id, property_id)
        return FavoriteToggle(property_id=property_id, saved=False)

    saved_repo.save_property(db, user_id, property_id)
    return FavoriteToggle(property_id=property_id, saved=True)
