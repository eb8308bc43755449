"""
SQLAlchemy ORM Models

Auction properties, user favorites and sync run history.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    String, Integer, Numeric, DateTime, Boolean, Text,
    ForeignKey, CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.subasta.db.base import Base, JSONType, TimestampMixin


def Money(precision: int = 12, scale: int = 2) -> Numeric:
    """Numeric column read back as float."""
    return Numeric(precision, scale, asdecimal=False)


class Property(Base, TimestampMixin):
    """
    Auction property listing.

    Rows are deduplicated on (address, city, state) by the sync pipeline.
    """
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Location
    address: Mapped[str] = mapped_column(String(255), nullable=False, comment="Street address")
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(20), nullable=False, comment="State code")
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)
    county: Mapped[str] = mapped_column(String(100), nullable=False, comment="County name or FIPS code")

    # Characteristics
    property_type: Mapped[str] = mapped_column(String(50), nullable=False)
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[float]] = mapped_column(Money(4, 1), nullable=True)
    sqft: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    lot_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    parking: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    hoa: Mapped[Optional[float]] = mapped_column(Money(10, 2), nullable=True, comment="Monthly HOA fee")

    # Pricing
    original_price: Mapped[float] = mapped_column(Money(), nullable=False)
    auction_price: Mapped[float] = mapped_column(Money(), nullable=False, comment="Opening bid")
    discount: Mapped[int] = mapped_column(Integer, nullable=False, comment="Discount percentage")
    market_value: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)
    lien_amount: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)
    deposit_required: Mapped[Optional[float]] = mapped_column(Money(), nullable=True)

    # Investment metrics
    monthly_rent: Mapped[Optional[float]] = mapped_column(Money(10, 2), nullable=True)
    annual_roi: Mapped[Optional[float]] = mapped_column(Money(5, 2), nullable=True)
    cap_rate: Mapped[Optional[float]] = mapped_column(Money(5, 2), nullable=True)
    opportunity_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="1-5")

    # Auction
    auction_type: Mapped[str] = mapped_column(String(50), nullable=False)
    auction_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    auction_location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    trustee_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Sync metadata
    external_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="ATTOM identifier")
    images: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True, comment="Image descriptors")
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
    data_source: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    last_synced_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    saved_by: Mapped[List["SavedProperty"]] = relationship(
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'sold', 'cancelled')",
            name="check_property_status_valid"
        ),
        CheckConstraint(
            "opportunity_score IS NULL OR opportunity_score BETWEEN 1 AND 5",
            name="check_opportunity_score_range"
        ),
        Index("idx_properties_address_city_state", "address", "city", "state"),
        Index("idx_properties_state_county", "state", "county"),
        Index("idx_properties_discount", "discount"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.address}, state={self.state})>"


class SavedProperty(Base):
    """A property saved as favorite by a user."""
    __tablename__ = "saved_properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    property: Mapped[Property] = relationship(back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_saved_properties_user_property"),
        Index("idx_saved_properties_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<SavedProperty(user_id={self.user_id}, property_id={self.property_id})>"


class SyncRun(Base, TimestampMixin):
    """Property sync execution history."""
    __tablename__ = "sync_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sync_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="daily_sync or manual_sync"
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Job status: running, success, partial, failure"
    )
    states: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True, comment="States synced")

    # Record counts
    records_processed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    records_inserted: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    records_updated: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    records_failed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timing
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('running', 'success', 'failure', 'partial')",
            name="check_sync_run_status_valid"
        ),
        Index("idx_sync_runs_started_at", "started_at"),
    )

    def __repr__(self) -> str:
        return f"<SyncRun(type={self.sync_type}, status={self.status}, processed={self.records_processed})>"
