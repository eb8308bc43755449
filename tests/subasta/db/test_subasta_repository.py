"""
Tests for Repository Pattern

Tests CRUD operations, listing filters, favorites and sync run tracking.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from src.subasta.db.base import as_utc
from src.subasta.db.models import Property, SavedProperty, SyncRun
from src.subasta.db.repository import (
    PropertyRepository,
    SavedPropertyRepository,
    SyncRunRepository,
)
from src.subasta.models.property import PropertyFilters


@pytest.fixture
def seeded(test_db, property_values):
    """A small listing spread across states, counties and prices."""
    repo = PropertyRepository()
    rows = [
        property_values(address="1 Ocean Dr", city="Miami Beach", county="Miami-Dade",
                        auction_price=150000, discount=45, bedrooms=3, bathrooms=2,
                        property_type="Casa", auction_type="foreclosure"),
        property_values(address="2 Bay Rd", city="Tampa", county="Hillsborough",
                        auction_price=90000, discount=20, bedrooms=2, bathrooms=1,
                        property_type="Condominio", auction_type="tax"),
        property_values(address="3 Palm Way", city="Miami", county="Miami-Dade",
                        auction_price=400000, discount=35, bedrooms=4, bathrooms=3,
                        property_type="Casa de Lujo", auction_type="bankruptcy"),
        property_values(address="4 Main St", city="Houston", state="TX", county="Harris",
                        auction_price=120000, discount=55, bedrooms=3, bathrooms=2.5,
                        property_type="Casa Grande", auction_type="foreclosure"),
    ]
    created = [repo.create(test_db, **row) for row in rows]
    test_db.commit()
    return created


class TestPropertyRepository:
    """Tests for PropertyRepository."""

    def test_create_and_get(self, test_db, property_values):
        repo = PropertyRepository()
        created = repo.create(test_db, **property_values(images=[{"url": "/x", "type": "placeholder", "caption": "c"}]))
        test_db.commit()

        found = repo.get_by_id(test_db, created.id)

        assert found.address == "123 Main St"
        assert found.images[0]["url"] == "/x"
        assert found.status == "active"
        assert found.featured is False
        assert found.created_at is not None

    def test_get_by_address(self, test_db, seeded):
        repo = PropertyRepository()

        assert repo.get_by_address(test_db, "2 Bay Rd", "Tampa", "FL").id == seeded[1].id
        assert repo.get_by_address(test_db, "2 Bay Rd", "Tampa", "TX") is None

    def test_update(self, test_db, seeded):
        repo = PropertyRepository()
        updated = repo.update(test_db, seeded[0].id, discount=60, opportunity_score=5)
        test_db.commit()

        assert updated.discount == 60
        assert repo.get_by_id(test_db, seeded[0].id).opportunity_score == 5

    def test_update_missing(self, test_db):
        assert PropertyRepository().update(test_db, 999, discount=60) is None

    def test_default_listing_sorted_by_discount_desc(self, test_db, seeded):
        results = PropertyRepository().get_properties(test_db)
        assert [p.discount for p in results] == [55, 45, 35, 20]

    def test_filter_state_and_county(self, test_db, seeded):
        repo = PropertyRepository()

        florida = repo.get_properties(test_db, PropertyFilters(state="FL"))
        dade = repo.get_properties(test_db, PropertyFilters(state="FL", county="Miami-Dade"))

        assert len(florida) == 3
        assert {p.address for p in dade} == {"1 Ocean Dr", "3 Palm Way"}

    def test_city_substring_case_insensitive(self, test_db, seeded):
        results = PropertyRepository().get_properties(test_db, PropertyFilters(city="miami"))
        assert {p.address for p in results} == {"1 Ocean Dr", "3 Palm Way"}

    def test_price_range(self, test_db, seeded):
        results = PropertyRepository().get_properties(
            test_db, PropertyFilters(price_min=100000, price_max=150000)
        )
        assert {p.address for p in results} == {"1 Ocean Dr", "4 Main St"}

    def test_type_sets(self, test_db, seeded):
        repo = PropertyRepository()

        by_property_type = repo.get_properties(test_db, PropertyFilters(property_types=["Casa", "Condominio"]))
        by_auction_type = repo.get_properties(test_db, PropertyFilters(auction_types=["foreclosure"]))

        assert {p.address for p in by_property_type} == {"1 Ocean Dr", "2 Bay Rd"}
        assert {p.address for p in by_auction_type} == {"1 Ocean Dr", "4 Main St"}

    def test_min_discount_bedrooms_bathrooms(self, test_db, seeded):
        repo = PropertyRepository()

        assert len(repo.get_properties(test_db, PropertyFilters(min_discount=45))) == 2
        assert {p.address for p in repo.get_properties(test_db, PropertyFilters(bedrooms=3))} == {
            "1 Ocean Dr", "4 Main St"
        }
        assert {p.address for p in repo.get_properties(test_db, PropertyFilters(bathrooms=2.5))} == {
            "3 Palm Way", "4 Main St"
        }

    def test_property_id(self, test_db, seeded):
        results = PropertyRepository().get_properties(test_db, PropertyFilters(property_id=seeded[2].id))
        assert [p.id for p in results] == [seeded[2].id]

    def test_sort_by_price_asc(self, test_db, seeded):
        results = PropertyRepository().get_properties(
            test_db, PropertyFilters(sort_by="price", sort_order="asc")
        )
        assert [p.auction_price for p in results] == [90000, 120000, 150000, 400000]

    def test_sort_by_auction_date(self, test_db, property_values):
        repo = PropertyRepository()
        base = datetime(2025, 9, 1, tzinfo=timezone.utc)
        for offset in (3, 1, 2):
            repo.create(test_db, **property_values(address=f"{offset} Date St", auction_date=base + timedelta(days=offset)))
        test_db.commit()

        results = repo.get_properties(test_db, PropertyFilters(sort_by="auction_date", sort_order="asc"))

        assert [p.address for p in results] == ["1 Date St", "2 Date St", "3 Date St"]

    def test_limit_and_offset(self, test_db, seeded):
        repo = PropertyRepository()

        page_one = repo.get_properties(test_db, PropertyFilters(limit=2))
        page_two = repo.get_properties(test_db, PropertyFilters(limit=2, offset=2))

        assert [p.discount for p in page_one] == [55, 45]
        assert [p.discount for p in page_two] == [35, 20]

    def test_counties_by_state(self, test_db, seeded):
        counties = PropertyRepository().get_counties_by_state(test_db, "FL")

        assert counties == [
            {"county": "Hillsborough", "properties_count": 1},
            {"county": "Miami-Dade", "properties_count": 2},
        ]

    def test_counties_unknown_state(self, test_db, seeded):
        assert PropertyRepository().get_counties_by_state(test_db, "WY") == []


class TestSavedPropertyRepository:
    """Tests for SavedPropertyRepository."""

    def test_save_and_list(self, test_db, seeded):
        repo = SavedPropertyRepository()

        repo.save_property(test_db, 1, seeded[0].id)
        repo.save_property(test_db, 1, seeded[2].id)
        repo.save_property(test_db, 2, seeded[1].id)
        test_db.commit()

        saved = repo.get_saved_properties(test_db, 1)

        assert {s.property_id for s in saved} == {seeded[0].id, seeded[2].id}
        assert saved[0].property.address in {"1 Ocean Dr", "3 Palm Way"}

    def test_save_twice_keeps_one_row(self, test_db, seeded):
        repo = SavedPropertyRepository()

        first = repo.save_property(test_db, 1, seeded[0].id)
        second = repo.save_property(test_db, 1, seeded[0].id)
        test_db.commit()

        assert first.id == second.id
        assert repo.count(test_db) == 1

    def test_remove(self, test_db, seeded):
        repo = SavedPropertyRepository()
        repo.save_property(test_db, 1, seeded[0].id)
        test_db.commit()

        assert repo.remove_saved_property(test_db, 1, seeded[0].id) is True
        assert repo.remove_saved_property(test_db, 1, seeded[0].id) is False
        assert repo.is_property_saved(test_db, 1, seeded[0].id) is False


class TestSyncRunRepository:
    """Tests for SyncRunRepository."""

    def test_create_and_complete(self, test_db):
        repo = SyncRunRepository()

        run = repo.create_run(test_db, "manual_sync", states=["FL"])
        assert run.status == "running"

        completed = repo.complete_run(
            test_db, run.id, "partial",
            records_processed=9, records_inserted=6, records_updated=3, records_failed=1,
        )
        test_db.commit()

        assert completed.status == "partial"
        assert completed.records_failed == 1
        assert completed.completed_at is not None
        assert completed.states == ["FL"]

    def test_complete_missing_run(self, test_db):
        with pytest.raises(ValueError):
            SyncRunRepository().complete_run(test_db, 404, "success")

    def test_log_sync_result_and_latest(self, test_db):
        repo = SyncRunRepository()
        older = datetime(2025, 8, 1, 2, tzinfo=timezone.utc)
        newer = datetime(2025, 8, 2, 2, tzinfo=timezone.utc)
        result = SimpleNamespace(added=4, updated=1, errors=0, total_processed=5, status="success")

        repo.log_sync_result(test_db, "daily_sync", result, states=["FL"], started_at=older)
        repo.log_sync_result(test_db, "manual_sync", result, states=["TX"], started_at=newer)
        test_db.commit()

        latest = repo.get_latest(test_db)
        latest_daily = repo.get_latest(test_db, sync_type="daily_sync")

        assert latest.sync_type == "manual_sync"
        assert latest.records_inserted == 4
        assert latest.status == "success"
        assert as_utc(latest_daily.started_at) == older

    def test_latest_empty(self, test_db):
        assert SyncRunRepository().get_latest(test_db) is None


class TestAsUtc:
    """Tests for as_utc."""

    def test_naive(self):
        assert as_utc(datetime(2025, 1, 1)).tzinfo == timezone.utc

    def test_aware_untouched(self):
        value = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=-5)))
        assert as_utc(value) is value

    def test_none(self):
        assert as_utc(None) is None
