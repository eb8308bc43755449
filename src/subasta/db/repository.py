"""
Repository Pattern for Data Access

Provides CRUD operations and domain-specific queries for all models.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import and_, asc, delete, desc, func, select
from sqlalchemy.orm import Session, contains_eager

from src.subasta.db.models import Property, SavedProperty, SyncRun
from src.subasta.models.property import PropertyFilters
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

SORT_COLUMNS = {
    "discount": Property.discount,
    "price": Property.auction_price,
    "auction_date": Property.auction_date,
    "recently_added": Property.created_at,
}


class BaseRepository:
    """
    Base repository with common CRUD operations.

    Generic repository that can be extended for specific models.
    """

    def __init__(self, model: Type[T]):
        """
        Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get_by_id(self, session: Session, id_value: Any) -> Optional[T]:
        """
        Get single record by primary key.

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            Model instance or None
        """
        return session.get(self.model, id_value)

    def create(self, session: Session, **kwargs) -> T:
        """
        Create new record.

        Args:
            session: Database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        session.flush()
        logger.debug("repository_created", model=self.model.__name__, id=getattr(instance, 'id', None))
        return instance

    def update(self, session: Session, id_value: Any, **kwargs) -> Optional[T]:
        """
        Update existing record.

        Args:
            session: Database session
            id_value: Primary key value
            **kwargs: Fields to update

        Returns:
            Updated model instance or None
        """
        instance = self.get_by_id(session, id_value)
        if not instance:
            logger.warning("repository_update_not_found", model=self.model.__name__, id=id_value)
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        session.flush()
        logger.debug("repository_updated", model=self.model.__name__, id=id_value)
        return instance

    def count(self, session: Session) -> int:
        """Count total records."""
        return session.scalar(select(func.count()).select_from(self.model))


class PropertyRepository(BaseRepository):
    """Repository for Property model with listing queries."""

    def __init__(self):
        super().__init__(Property)

    def get_by_address(self, session: Session, address: str, city: str, state: str) -> Optional[Property]:
        """
        Get property by its dedup key.

        Args:
            session: Database session
            address: Street address (exact)
            city: City (exact)
            state: State code (exact)

        Returns:
            First matching Property or None
        """
        query = select(Property).where(
            and_(
                Property.address == address,
                Property.city == city,
                Property.state == state,
            )
        ).order_by(Property.id).limit(1)
        return session.execute(query).scalars().first()

    def get_properties(self, session: Session, filters: Optional[PropertyFilters] = None) -> List[Property]:
        """
        List properties matching every provided filter.

        Args:
            session: Database session
            filters: Filters, sort and pagination; None lists everything with defaults

        Returns:
            List of Property instances
        """
        filters = filters or PropertyFilters()
        conditions = []

        if filters.state:
            conditions.append(Property.state == filters.state)
        if filters.county:
            conditions.append(Property.county == filters.county)
        if filters.city:
            conditions.append(Property.city.ilike(f"%{filters.city}%"))
        if filters.property_id is not None:
            conditions.append(Property.id == filters.property_id)
        if filters.price_min is not None:
            conditions.append(Property.auction_price >= filters.price_min)
        if filters.price_max is not None:
            conditions.append(Property.auction_price <= filters.price_max)
        if filters.property_types:
            conditions.append(Property.property_type.in_(filters.property_types))
        if filters.auction_types:
            conditions.append(Property.auction_type.in_(filters.auction_types))
        if filters.min_discount is not None:
            conditions.append(Property.discount >= filters.min_discount)
        if filters.bedrooms is not None:
            conditions.append(Property.bedrooms == filters.bedrooms)
        if filters.bathrooms is not None:
            conditions.append(Property.bathrooms >= filters.bathrooms)

        query = select(Property)
        if conditions:
            query = query.where(and_(*conditions))

        direction = desc if filters.sort_order == "desc" else asc
        query = query.order_by(direction(SORT_COLUMNS[filters.sort_by]), Property.id)

        if filters.limit:
            query = query.limit(filters.limit)
        if filters.offset:
            query = query.offset(filters.offset)

        return list(session.execute(query).scalars().all())

    def get_counties_by_state(self, session: Session, state: str) -> List[Dict[str, Any]]:
        """
        Property counts per county for one state.

        Returns:
            [{"county": str, "properties_count": int}, ...] ordered by county
        """
        query = (
            select(Property.county, func.count().label("properties_count"))
            .where(Property.state == state)
            .group_by(Property.county)
            .order_by(Property.county)
        )
        return [
            {"county": county, "properties_count": count}
            for county, count in session.execute(query).all()
        ]


class SavedPropertyRepository(BaseRepository):
    """Repository for user favorites."""

    def __init__(self):
        super().__init__(SavedProperty)

    def get_saved_property(self, session: Session, user_id: int, property_id: int) -> Optional[SavedProperty]:
        query = select(SavedProperty).where(
            and_(SavedProperty.user_id == user_id, SavedProperty.property_id == property_id)
        )
        return session.execute(query).scalars().first()

    def is_property_saved(self, session: Session, user_id: int, property_id: int) -> bool:
        return self.get_saved_property(session, user_id, property_id) is not None

    def save_property(self, session: Session, user_id: int, property_id: int) -> SavedProperty:
        """Save a favorite; saving twice returns the existing row."""
        existing = self.get_saved_property(session, user_id, property_id)
        if existing:
            return existing
        saved = self.create(session, user_id=user_id, property_id=property_id)
        logger.info("property_saved", user_id=user_id, property_id=property_id)
        return saved

    def remove_saved_property(self, session: Session, user_id: int, property_id: int) -> bool:
        """
        Remove a favorite.

        Returns:
            True if a row was deleted
        """
        result = session.execute(
            delete(SavedProperty).where(
                and_(SavedProperty.user_id == user_id, SavedProperty.property_id == property_id)
            )
        )
        session.flush()
        removed = result.rowcount > 0
        if removed:
            logger.info("property_unsaved", user_id=user_id, property_id=property_id)
        return removed

    def get_saved_properties(self, session: Session, user_id: int) -> List[SavedProperty]:
        """Favorites for a user with their property, newest first."""
        query = (
            select(SavedProperty)
            .join(SavedProperty.property)
            .options(contains_eager(SavedProperty.property))
            .where(SavedProperty.user_id == user_id)
            .order_by(desc(SavedProperty.created_at), desc(SavedProperty.id))
        )
        return list(session.execute(query).scalars().all())


class SyncRunRepository(BaseRepository):
    """Repository for SyncRun model (sync history)."""

    def __init__(self):
        super().__init__(SyncRun)

    def create_run(
        self,
        session: Session,
        sync_type: str,
        states: Optional[List[str]] = None,
        started_at: Optional[datetime] = None
    ) -> SyncRun:
        """
        Create new sync run in the running state.

        Args:
            session: Database session
            sync_type: daily_sync or manual_sync
            states: States included in the run
            started_at: Start timestamp (defaults to now)

        Returns:
            SyncRun instance
        """
        run = SyncRun(
            sync_type=sync_type,
            status='running',
            states=states,
            started_at=started_at or datetime.now(timezone.utc)
        )
        session.add(run)
        session.flush()

        logger.info("sync_run_created", run_id=run.id, sync_type=sync_type)
        return run

    def complete_run(
        self,
        session: Session,
        run_id: int,
        status: str,
        records_processed: int = 0,
        records_inserted: int = 0,
        records_updated: int = 0,
        records_failed: int = 0,
        error_message: Optional[str] = None
    ) -> SyncRun:
        """
        Mark sync run as complete.

        Args:
            session: Database session
            run_id: Run ID
            status: Final status (success, partial, failure)
            records_processed: Total records processed
            records_inserted: Records inserted
            records_updated: Records updated
            records_failed: Records failed
            error_message: Error message if failed

        Returns:
            Updated SyncRun instance
        """
        run = self.get_by_id(session, run_id)
        if not run:
            raise ValueError(f"SyncRun {run_id} not found")

        run.status = status
        run.records_processed = records_processed
        run.records_inserted = records_inserted
        run.records_updated = records_updated
        run.records_failed = records_failed
        run.error_message = error_message
        run.completed_at = datetime.now(timezone.utc)

        session.flush()

        logger.info(
            "sync_run_completed",
            run_id=run_id,
            status=status,
            processed=records_processed,
            inserted=records_inserted,
            updated=records_updated,
            failed=records_failed
        )
        return run

    def log_sync_result(
        self,
        session: Session,
        sync_type: str,
        result: Any,
        states: Optional[List[str]] = None,
        started_at: Optional[datetime] = None
    ) -> SyncRun:
        """
        Record a finished sync in one step.

        Args:
            session: Database session
            sync_type: daily_sync or manual_sync
            result: SyncResult with added/updated/errors/total_processed
            states: States included in the run
            started_at: Start timestamp (defaults to now)

        Returns:
            Completed SyncRun instance
        """
        run = self.create_run(session, sync_type, states=states, started_at=started_at)
        return self.complete_run(
            session,
            run.id,
            status=result.status,
            records_processed=result.total_processed,
            records_inserted=result.added,
            records_updated=result.updated,
            records_failed=result.errors,
        )

    def get_latest(self, session: Session, sync_type: Optional[str] = None) -> Optional[SyncRun]:
        """Most recently started run, optionally of one type."""
        query = select(SyncRun).order_by(desc(SyncRun.started_at), desc(SyncRun.id))
        if sync_type:
            query = query.where(SyncRun.sync_type == sync_type)
        return session.execute(query.limit(1)).scalars().first()
