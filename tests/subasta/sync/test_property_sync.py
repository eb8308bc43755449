"""
Tests for the property sync orchestrator
"""
import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, Mock, patch

import pytest
from sqlalchemy import func, select

from config.settings import settings
from src.subasta.db.models import Property, SyncRun
from src.subasta.enrichment.image_enricher import PropertyImageEnricher
from src.subasta.enrichment.street_view import StreetViewClient
from src.subasta.exceptions import (
    ConfigurationError,
    SyncInProgressError,
    UpstreamAuthError,
    UpstreamUnavailable,
)
from src.subasta.models.attom import AttomResponse
from src.subasta.sync.property_sync import PropertyDataSync, SyncOptions, SyncResult
from src.subasta.transformers.attom_transformer import AttomPropertyTransformer

PAGE_SIZE = 5


def attom_record(n, state="FL", city="Miami"):
    return {
        "identifier": {"Id": n},
        "address": {"oneLine": f"{n} Coral Way", "locality": city, "state": state, "postal1": "33101"},
        "building": {"size": {"bldgSize": 1600, "livingSize": 1600}, "rooms": {"beds": 3, "baths": 2}},
        "assessment": {"market": {"mktTtlValue": 400000}},
        "foreclosure": {"amount": 150000, "date": "2025-10-01T00:00:00Z", "type": "foreclosure"},
    }


def make_client(pages_by_state):
    """Fake ATTOM client serving pages (lists of records or exceptions) per state."""
    client = Mock()
    client.base_url = "https://attom.test"

    def fetch(state=None, city=None, zip_code=None, page=1, page_size=25):
        pages = pages_by_state.get(state, [])
        if page - 1 >= len(pages):
            return AttomResponse()
        current = pages[page - 1]
        if isinstance(current, Exception):
            raise current
        return AttomResponse.model_validate({"property": current})

    client.fetch_foreclosure_properties.side_effect = fetch
    return client


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def make_sync(test_session_factory, sleep):
    def factory(pages_by_state, transformer=None):
        return PropertyDataSync(
            client=make_client(pages_by_state),
            transformer=transformer,
            image_enricher=PropertyImageEnricher(StreetViewClient(api_key="", session=MagicMock())),
            session_factory=test_session_factory,
            sleep=sleep,
            page_size=PAGE_SIZE,
        )
    return factory


def count_properties(session_factory):
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(Property))


class TestSyncResult:
    """Tests for SyncResult."""

    def test_merge(self):
        total = SyncResult(added=1, updated=2, errors=0, total_processed=3)
        total.merge(SyncResult(added=4, updated=0, errors=1, total_processed=4))
        assert total == SyncResult(added=5, updated=2, errors=1, total_processed=7)

    def test_to_dict_is_camel_case(self):
        assert SyncResult(1, 2, 3, 3).to_dict() == {
            "added": 1, "updated": 2, "errors": 3, "totalProcessed": 3
        }

    @pytest.mark.parametrize(
        "result, status",
        [
            (SyncResult(), "success"),
            (SyncResult(added=2, total_processed=2), "success"),
            (SyncResult(added=2, errors=1, total_processed=2), "partial"),
            (SyncResult(errors=3), "failure"),
        ],
    )
    def test_status(self, result, status):
        assert result.status == status

    def test_options_cancelled(self):
        event = threading.Event()
        options = SyncOptions(max_properties=10, cancel_event=event)
        assert options.cancelled is False
        event.set()
        assert options.cancelled is True


class TestSyncState:
    """Tests for PropertyDataSync.sync_state and sync_all_states."""

    def test_adds_new_properties(self, make_sync, test_session_factory, sleep):
        sync = make_sync({"FL": [[attom_record(1), attom_record(2), attom_record(3)]]})

        result = sync.sync_all_states(states=["FL"])

        assert result == SyncResult(added=3, updated=0, errors=0, total_processed=3)
        assert count_properties(test_session_factory) == 3
        assert sleep.call_count == 3
        sleep.assert_called_with(settings.sync_property_delay_seconds)

        with test_session_factory() as session:
            stored = session.execute(select(Property).order_by(Property.id)).scalars().first()
            assert stored.address == "1 Coral Way"
            assert stored.data_source == "ATTOM"
            assert stored.last_synced_at is not None
            assert stored.images[0]["caption"] == "Vista desde la calle"
            assert stored.images[0]["type"] == "placeholder"

    def test_high_score_gets_four_images(self, make_sync, test_session_factory):
        # 63% discount, 400k value, 0.375 ratio -> score 5
        make_sync({"FL": [[attom_record(1)]]}).sync_all_states(states=["FL"])

        with test_session_factory() as session:
            stored = session.execute(select(Property)).scalars().one()
            assert stored.opportunity_score == 5
            assert len(stored.images) == 4

    def test_second_run_skips_fresh_rows(self, make_sync, test_session_factory):
        """Test that an immediate re-run changes nothing."""
        pages = {"FL": [[attom_record(1), attom_record(2)]]}
        make_sync(pages).sync_all_states(states=["FL"])

        second = make_sync(pages).sync_all_states(states=["FL"])

        assert second == SyncResult()
        assert count_properties(test_session_factory) == 2

    def test_force_update_rewrites_rows(self, make_sync, test_session_factory):
        pages = {"FL": [[attom_record(1), attom_record(2)]]}
        make_sync(pages).sync_all_states(states=["FL"])

        second = make_sync(pages).sync_all_states(states=["FL"], force_update=True)

        assert second == SyncResult(added=0, updated=2, errors=0, total_processed=2)
        assert count_properties(test_session_factory) == 2

    def test_stale_rows_are_updated(self, make_sync, test_session_factory):
        pages = {"FL": [[attom_record(1)]]}
        make_sync(pages).sync_all_states(states=["FL"])

        with test_session_factory() as session:
            stored = session.execute(select(Property)).scalars().one()
            stored.last_synced_at = datetime.now(timezone.utc) - timedelta(days=2)

        second = make_sync(pages).sync_all_states(states=["FL"])

        assert second.updated == 1
        assert second.added == 0

    def test_duplicate_in_same_page_written_once(self, make_sync, test_session_factory):
        result = make_sync({"FL": [[attom_record(1), attom_record(1)]]}).sync_all_states(states=["FL"])

        assert result.added == 1
        assert result.total_processed == 1
        assert count_properties(test_session_factory) == 1

    def test_record_failure_is_isolated(self, make_sync, test_session_factory):
        """Test that one failing record of ten leaves the other nine written."""
        real = AttomPropertyTransformer()

        def transform(record, fallback_index=0):
            if record.identifier.id == 5:
                raise RuntimeError("bad record")
            return real.transform(record, fallback_index=fallback_index)

        transformer = Mock()
        transformer.transform.side_effect = transform
        records = [attom_record(n) for n in range(1, 11)]
        sync = make_sync({"FL": [records[:5], records[5:]]}, transformer=transformer)

        result = sync.sync_all_states(states=["FL"])

        assert result.errors == 1
        assert result.added + result.updated == 9
        assert result.total_processed == 9
        assert count_properties(test_session_factory) == 9

    def test_page_error_stops_state(self, make_sync, test_session_factory):
        full_page = [attom_record(n) for n in range(1, PAGE_SIZE + 1)]
        sync = make_sync({"FL": [full_page, UpstreamUnavailable("boom"), [attom_record(99)]]})

        result = sync.sync_all_states(states=["FL"])

        assert result.added == PAGE_SIZE
        assert result.errors == 1
        assert sync.client.fetch_foreclosure_properties.call_count == 2

    def test_auth_error_counts_and_moves_on(self, make_sync):
        """Test that a credential failure in one state does not stop the others."""
        sync = make_sync({
            "FL": [UpstreamAuthError("denied", status_code=401)],
            "TX": [[attom_record(7, state="TX", city="Houston")]],
        })

        result = sync.sync_all_states(states=["FL", "TX"])

        assert result.errors == 1
        assert result.added == 1

    def test_pagination_stops_on_short_page(self, make_sync):
        full_page = [attom_record(n) for n in range(1, PAGE_SIZE + 1)]
        short_page = [attom_record(n) for n in range(100, 102)]
        sync = make_sync({"FL": [full_page, short_page, [attom_record(500)]]})

        result = sync.sync_all_states(states=["FL"])

        assert result.added == PAGE_SIZE + 2
        assert sync.client.fetch_foreclosure_properties.call_count == 2

    def test_pagination_stops_on_empty_page(self, make_sync):
        full_page = [attom_record(n) for n in range(1, PAGE_SIZE + 1)]
        sync = make_sync({"FL": [full_page]})

        result = sync.sync_all_states(states=["FL"])

        assert result.added == PAGE_SIZE
        pages = [c.kwargs["page"] for c in sync.client.fetch_foreclosure_properties.call_args_list]
        assert pages == [1, 2]

    def test_max_properties(self, make_sync, test_session_factory):
        pages = [[attom_record(p * PAGE_SIZE + n) for n in range(PAGE_SIZE)] for p in range(4)]
        sync = make_sync({"FL": pages})

        result = sync.sync_all_states(states=["FL"], max_properties=7)

        assert result.total_processed == 7
        assert count_properties(test_session_factory) == 7

    def test_delay_between_states(self, make_sync, sleep):
        make_sync({}).sync_all_states(states=["FL", "TX", "CA"])

        state_delays = [c for c in sleep.call_args_list if c.args == (settings.sync_state_delay_seconds,)]
        assert len(state_delays) == 2

    def test_default_states(self, make_sync):
        sync = make_sync({})
        sync.sync_all_states()

        states = [c.kwargs["state"] for c in sync.client.fetch_foreclosure_properties.call_args_list]
        assert states == settings.sync_states

    def test_empty_state_list_syncs_nothing(self, make_sync, sleep):
        sync = make_sync({"FL": [[attom_record(1)]]})

        result = sync.sync_all_states(states=[])

        assert result == SyncResult()
        sync.client.fetch_foreclosure_properties.assert_not_called()
        sleep.assert_not_called()

    def test_zero_max_properties_writes_nothing(self, make_sync, test_session_factory):
        sync = make_sync({"FL": [[attom_record(1), attom_record(2)]]})

        result = sync.sync_all_states(states=["FL"], max_properties=0)

        assert result == SyncResult()
        assert count_properties(test_session_factory) == 0

    def test_cancelled_before_start(self, make_sync):
        event = threading.Event()
        event.set()
        sync = make_sync({"FL": [[attom_record(1)]]})

        result = sync.sync_all_states(states=["FL"], cancel_event=event)

        assert result == SyncResult()
        sync.client.fetch_foreclosure_properties.assert_not_called()

    def test_missing_api_key(self, test_session_factory):
        sync = PropertyDataSync(session_factory=test_session_factory, sleep=Mock())

        with patch.object(settings, "attom_api_key", None):
            with pytest.raises(ConfigurationError):
                sync.sync_all_states(states=["FL"])


class TestIsFresh:
    """Tests for the freshness check."""

    def test_uses_last_synced_at(self, make_sync):
        sync = make_sync({})
        now = datetime(2025, 8, 10, tzinfo=timezone.utc)
        row = Mock(last_synced_at=now - timedelta(hours=23), created_at=now - timedelta(days=30))
        assert sync.is_fresh(row, now=now) is True

    def test_falls_back_to_created_at(self, make_sync):
        sync = make_sync({})
        now = datetime(2025, 8, 10, tzinfo=timezone.utc)
        row = Mock(last_synced_at=None, created_at=now - timedelta(days=2))
        assert sync.is_fresh(row, now=now) is False

    def test_naive_timestamps_read_as_utc(self, make_sync):
        sync = make_sync({})
        now = datetime(2025, 8, 10, 12, tzinfo=timezone.utc)
        row = Mock(last_synced_at=datetime(2025, 8, 10, 1), created_at=None)
        assert sync.is_fresh(row, now=now) is True


class TestPerformDailySync:
    """Tests for perform_daily_sync and get_sync_status."""

    def test_records_sync_run(self, make_sync, test_session_factory):
        sync = make_sync({"FL": [[attom_record(1), attom_record(2)]]})

        result = sync.perform_daily_sync()

        assert result.added == 2
        with test_session_factory() as session:
            run = session.execute(select(SyncRun)).scalars().one()
            assert run.sync_type == "daily_sync"
            assert run.status == "success"
            assert run.records_inserted == 2
            assert run.states == settings.sync_states
            assert run.completed_at is not None

    def test_uses_daily_limit(self, make_sync):
        sync = make_sync({})
        with patch.object(sync, "sync_all_states", return_value=SyncResult()) as sync_all:
            sync.perform_daily_sync(sync_type="manual_sync")

        sync_all.assert_called_once_with(
            max_properties=settings.daily_sync_max_properties,
            force_update=False,
        )

    def test_concurrent_run_rejected(self, make_sync):
        sync = make_sync({})
        assert PropertyDataSync._run_lock.acquire(blocking=False)
        try:
            assert sync.is_running is True
            with pytest.raises(SyncInProgressError):
                sync.perform_daily_sync()
        finally:
            PropertyDataSync._run_lock.release()

        assert sync.is_running is False

    def test_lock_released_after_error(self, make_sync):
        sync = make_sync({})
        with patch.object(sync, "sync_all_states", side_effect=ConfigurationError("no key")):
            with pytest.raises(ConfigurationError):
                sync.perform_daily_sync()

        assert sync.is_running is False

    def test_sync_status(self, make_sync):
        sync = make_sync({"FL": [[attom_record(1)]]})
        empty = sync.get_sync_status()

        assert empty["running"] is False
        assert empty["schedule"] == settings.daily_sync_schedule
        assert empty["last_run"] is None

        sync.perform_daily_sync(sync_type="manual_sync")
        status = sync.get_sync_status()

        assert status["last_run"].sync_type == "manual_sync"
        assert status["last_run"].records_inserted == 1
