"""
Property Data Sync

Pulls foreclosure listings from ATTOM state by state, converts them into
property rows, attaches Street View imagery and upserts them on the
(address, city, state) key. Runs sequentially with fixed delays to respect
external API limits.
"""
import threading
import time
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from src.subasta.clients.attom_client import AttomClient
from src.subasta.db.base import as_utc
from src.subasta.db.repository import PropertyRepository, SyncRunRepository
from src.subasta.db.session import get_db_session
from src.subasta.enrichment.image_enricher import PropertyImageEnricher
from src.subasta.exceptions import SyncInProgressError
from src.subasta.models.attom import AttomProperty
from src.subasta.transformers.attom_transformer import AttomPropertyTransformer
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

ADDED = "added"
UPDATED = "updated"
SKIPPED = "skipped"


@dataclass
class SyncResult:
    """Counters for one state or a whole run."""

    added: int = 0
    updated: int = 0
    errors: int = 0
    total_processed: int = 0

    def merge(self, other: "SyncResult") -> "SyncResult":
        self.added += other.added
        self.updated += other.updated
        self.errors += other.errors
        self.total_processed += other.total_processed
        return self

    @property
    def status(self) -> str:
        """success, partial (some errors) or failure (errors and nothing written)."""
        if not self.errors:
            return "success"
        if self.added or self.updated:
            return "partial"
        return "failure"

    def to_dict(self) -> Dict[str, int]:
        return {
            "added": self.added,
            "updated": self.updated,
            "errors": self.errors,
            "totalProcessed": self.total_processed,
        }


@dataclass
class SyncOptions:
    max_properties: int
    force_update: bool = False
    cancel_event: Optional[threading.Event] = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


class PropertyDataSync:
    """
    Orchestrates ATTOM to database synchronization.

    Collaborators are injectable for testing; by default the ATTOM client is
    created on first use so status queries work without an API key.
    """

    _run_lock = threading.Lock()

    def __init__(
        self,
        client: Optional[AttomClient] = None,
        transformer: Optional[AttomPropertyTransformer] = None,
        image_enricher: Optional[PropertyImageEnricher] = None,
        session_factory: Optional[Callable[[], AbstractContextManager]] = None,
        sleep: Callable[[float], None] = time.sleep,
        page_size: Optional[int] = None,
        stale_after: Optional[timedelta] = None,
    ):
        self._client = client
        self.transformer = transformer or AttomPropertyTransformer()
        self._image_enricher = image_enricher
        self.session_factory = session_factory or get_db_session
        self.sleep = sleep
        self.page_size = page_size or settings.sync_page_size
        self.stale_after = stale_after or timedelta(days=settings.sync_stale_after_days)

        self.property_repo = PropertyRepository()
        self.run_repo = SyncRunRepository()

    @property
    def client(self) -> AttomClient:
        """ATTOM client; raises ConfigurationError when no API key is configured."""
        if self._client is None:
            self._client = AttomClient()
        return self._client

    @property
    def image_enricher(self) -> PropertyImageEnricher:
        if self._image_enricher is None:
            self._image_enricher = PropertyImageEnricher()
        return self._image_enricher

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def sync_all_states(
        self,
        states: Optional[List[str]] = None,
        max_properties: Optional[int] = None,
        force_update: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> SyncResult:
        """
        Sync every state in turn and aggregate the counters.

        Args:
            states: State codes (defaults to settings.sync_states)
            max_properties: Per-state cap on written records
            force_update: Rewrite existing rows even when fresh
            cancel_event: Set to stop between properties or states

        Returns:
            Aggregated SyncResult. Per-state failures only add to ``errors``.

        Raises:
            ConfigurationError: If no ATTOM API key is configured
        """
        states = settings.sync_states if states is None else states
        options = SyncOptions(
            max_properties=settings.sync_max_properties if max_properties is None else max_properties,
            force_update=force_update,
            cancel_event=cancel_event,
        )
        logger.info(
            "property_sync_started",
            states=states,
            max_properties=options.max_properties,
            base_url=self.client.base_url,
        )
        result = SyncResult()

        for index, state in enumerate(states):
            if options.cancelled:
                logger.warning("property_sync_cancelled", remaining_states=states[index:])
                break

            try:
                result.merge(self.sync_state(state, options))
            except Exception as e:
                logger.error(
                    "state_sync_failed",
                    state=state,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.errors += 1

            if index < len(states) - 1:
                self.sleep(settings.sync_state_delay_seconds)

        logger.info("property_sync_completed", **result.to_dict())
        return result

    def sync_state(self, state: str, options: SyncOptions) -> SyncResult:
        """
        Page through one state's listings.

        Stops on an empty or short page, on reaching ``max_properties``, on
        cancellation, or on the first page that fails to load.
        """
        result = SyncResult()
        page = 1

        while result.total_processed < options.max_properties and not options.cancelled:
            try:
                response = self.client.fetch_foreclosure_properties(
                    state=state, page=page, page_size=self.page_size
                )
            except Exception as e:
                logger.error(
                    "state_page_fetch_failed",
                    state=state,
                    page=page,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.errors += 1
                break

            records = response.property
            if not records:
                break

            for record in records:
                if result.total_processed >= options.max_properties or options.cancelled:
                    break

                try:
                    outcome = self.sync_record(record, result.total_processed, options.force_update)
                except Exception as e:
                    logger.error(
                        "property_sync_record_failed",
                        state=state,
                        page=page,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    result.errors += 1
                    continue

                if outcome == SKIPPED:
                    continue
                if outcome == ADDED:
                    result.added += 1
                else:
                    result.updated += 1
                result.total_processed += 1
                self.sleep(settings.sync_property_delay_seconds)

            if len(records) < self.page_size:
                break
            page += 1

        logger.info(
            "state_sync_completed",
            state=state,
            added=result.added,
            updated=result.updated,
            errors=result.errors,
        )
        return result

    def sync_record(self, record: AttomProperty, fallback_index: int, force_update: bool) -> str:
        """
        Transform and store one external record in its own session scope.

        Returns:
            "added", "updated" or "skipped" (existing row still fresh)
        """
        draft = self.transformer.transform(record, fallback_index=fallback_index)

        with self.session_factory() as session:
            existing = self.property_repo.get_by_address(session, draft.address, draft.city, draft.state)

            if existing and not force_update and self.is_fresh(existing):
                return SKIPPED

            full_address = f"{draft.address}, {draft.city}, {draft.state}"
            draft.images = self.image_enricher.enrich(full_address, draft.opportunity_score)

            values = draft.to_record()
            values["last_synced_at"] = datetime.now(timezone.utc)

            if existing:
                self.property_repo.update(session, existing.id, **values)
                return UPDATED

            self.property_repo.create(session, **values)
            return ADDED

    def is_fresh(self, existing: Any, now: Optional[datetime] = None) -> bool:
        """True when the row was synced (or created) less than ``stale_after`` ago."""
        synced_at = as_utc(existing.last_synced_at or existing.created_at)
        if synced_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now - synced_at < self.stale_after

    def perform_daily_sync(self, sync_type: str = "daily_sync") -> SyncResult:
        """
        Scheduled (or manually triggered) sync with the daily limits.

        The result is recorded as a SyncRun row.

        Raises:
            SyncInProgressError: If another sync is running in this process
            ConfigurationError: If no ATTOM API key is configured
        """
        if not self._run_lock.acquire(blocking=False):
            raise SyncInProgressError("A property sync is already running")

        try:
            started_at = datetime.now(timezone.utc)
            logger.info("daily_sync_started", sync_type=sync_type)

            result = self.sync_all_states(
                max_properties=settings.daily_sync_max_properties,
                force_update=False,
            )

            with self.session_factory() as session:
                self.run_repo.log_sync_result(
                    session,
                    sync_type,
                    result,
                    states=list(settings.sync_states),
                    started_at=started_at,
                )

            logger.info("daily_sync_completed", sync_type=sync_type, **result.to_dict())
            return result
        finally:
            self._run_lock.release()

    def get_sync_status(self, session: Optional[Session] = None) -> Dict[str, Any]:
        """
        Running flag, schedule and the latest recorded run.

        Args:
            session: Existing session to read from; a new scope is opened otherwise
        """
        if session is None:
            with self.session_factory() as scoped:
                return self.get_sync_status(scoped)

        latest = self.run_repo.get_latest(session)
        return {
            "running": self.is_running,
            "schedule": settings.daily_sync_schedule,
            "job_name": "daily_property_sync",
            "last_run": latest,
        }
