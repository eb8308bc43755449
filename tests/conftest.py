"""
Shared test fixtures.

Tests run against an in-memory SQLite database; the environment is set
before any application module reads the settings.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "console")

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.subasta.db.base import Base
from src.subasta.db import models  # noqa: F401 - register tables


@pytest.fixture(scope="function")
def test_engine():
    """In-memory SQLite engine shared across threads (TestClient runs handlers in a pool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_engine):
    """Context-manager session factory with the same commit/rollback rules as get_db_session."""
    Session = sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)

    @contextmanager
    def factory():
        session = Session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Create an in-memory SQLite database session for testing."""
    Session = sessionmaker(bind=test_engine, expire_on_commit=False)
    session = Session()

    yield session

    session.close()


def make_property_values(**overrides):
    """Column values for a valid properties row."""
    values = {
        "address": "123 Main St",
        "city": "Miami",
        "state": "FL",
        "zip_code": "33101",
        "county": "Miami-Dade",
        "property_type": "Casa",
        "bedrooms": 3,
        "bathrooms": 2.0,
        "sqft": 1500,
        "original_price": 300000.0,
        "auction_price": 178500.0,
        "discount": 30,
        "market_value": 300000.0,
        "lien_amount": 210000.0,
        "auction_type": "foreclosure",
        "opportunity_score": 3,
        "data_source": "ATTOM",
        "images": [],
    }
    values.update(overrides)
    return values


@pytest.fixture
def property_values():
    """Factory for property column values."""
    return make_property_values
