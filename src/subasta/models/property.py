"""
Property Data Models

Pydantic models for properties flowing between the sync pipeline, the
storage layer and the HTTP surface.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the web client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PropertyImage(CamelModel):
    """
    Image descriptor stored in ``Property.images``.

    Attributes:
        url: Absolute Street View URL or the local placeholder path
        type: street_view or placeholder
        caption: Caption shown under the image
        heading: Compass heading of the camera, when applicable
    """

    url: str
    type: Literal["street_view", "placeholder"] = "street_view"
    caption: str
    heading: Optional[int] = None


class PropertyDraft(CamelModel):
    """
    Internal property shape produced from an external record.

    Field names match the ``properties`` table columns so a draft can be
    passed straight to the repository.
    """

    address: str
    city: str
    state: str
    zip_code: str
    county: str
    property_type: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    sqft: Optional[int] = None
    lot_size: Optional[str] = None
    year_built: Optional[int] = None
    original_price: float
    auction_price: float
    discount: int = Field(..., ge=15)
    market_value: Optional[float] = None
    lien_amount: Optional[float] = None
    auction_type: str = "foreclosure"
    auction_date: datetime
    opportunity_score: int = Field(..., ge=1, le=5)
    trustee_phone: Optional[str] = None
    external_id: Optional[str] = None
    data_source: str = "ATTOM"
    images: List[PropertyImage] = Field(default_factory=list)

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        """Two-letter state codes are stored upper-case."""
        v = v.strip()
        return v.upper() if len(v) == 2 else v

    def to_record(self) -> dict:
        """Column/value mapping for inserts and updates."""
        record = self.model_dump(by_alias=False)
        record["images"] = [image.model_dump(exclude_none=True) for image in self.images]
        return record


class PropertyView(CamelModel):
    """Read model for a stored property."""

    id: int
    address: str
    city: str
    state: str
    zip_code: str
    county: str
    property_type: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    sqft: Optional[int] = None
    lot_size: Optional[str] = None
    year_built: Optional[int] = None
    condition: Optional[str] = None
    parking: Optional[str] = None
    hoa: Optional[float] = None
    original_price: float
    auction_price: float
    discount: int
    auction_type: str
    auction_date: Optional[datetime] = None
    auction_location: Optional[str] = None
    deposit_required: Optional[float] = None
    market_value: Optional[float] = None
    monthly_rent: Optional[float] = None
    annual_roi: Optional[float] = None
    cap_rate: Optional[float] = None
    lien_amount: Optional[float] = None
    opportunity_score: Optional[int] = None
    trustee_phone: Optional[str] = None
    images: List[PropertyImage] = Field(default_factory=list)
    featured: bool = False
    status: str = "active"
    data_source: Optional[str] = None
    last_synced_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("images", mode="before")
    @classmethod
    def coerce_images(cls, v):
        """Accept bare URL strings alongside full descriptors."""
        if v is None:
            return []
        return [
            {"url": item, "type": "street_view", "caption": ""} if isinstance(item, str) else item
            for item in v
        ]


SortField = Literal["discount", "price", "auction_date", "recently_added"]
SortOrder = Literal["asc", "desc"]


class PropertyFilters(BaseModel):
    """
    Every supported property listing filter.

    A field left as None places no constraint on the query.

    Attributes:
        state: State code equality
        county: County equality
        city: Case-insensitive substring match on city
        property_id: Primary key equality
        price_min: Minimum auction price (inclusive)
        price_max: Maximum auction price (inclusive)
        property_types: Property type must be one of these
        auction_types: Auction type must be one of these
        min_discount: Minimum discount percentage (inclusive)
        bedrooms: Exact bedroom count
        bathrooms: Minimum bathroom count
        sort_by: discount, price, auction_date or recently_added
        sort_order: asc or desc
        limit: Maximum rows returned
        offset: Rows skipped
    """

    state: Optional[str] = None
    county: Optional[str] = None
    city: Optional[str] = None
    property_id: Optional[int] = None
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    property_types: Optional[List[str]] = None
    auction_types: Optional[List[str]] = None
    min_discount: Optional[int] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    sort_by: SortField = "discount"
    sort_order: SortOrder = "desc"
    limit: Optional[int] = Field(50, ge=1, le=1000)
    offset: int = Field(0, ge=0)
