"""
Shared fixtures for the test suite.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.services.clock import DeterministicClock
from app.domain.services.time_entry_service import TimeEntryService
from app.domain.services.aggregation_service import AggregationService
from app.infrastructure.db.models import create_all_tables
from app.infrastructure.repositories.memory import InMemoryStore, InMemoryUnitOfWork
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
def clock():
    """Clock fixed at 2024-03-20 09:00 UTC, a Wednesday."""
    return DeterministicClock(datetime(2024, 3, 20, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def uow(store):
    return InMemoryUnitOfWork(store)


@pytest.fixture
def service(uow, clock):
    return TimeEntryService(uow, clock)


@pytest.fixture
def aggregation(store):
    return AggregationService(InMemoryUnitOfWork(store))


@pytest.fixture
def entry_payload():
    """A valid create payload."""
    return {
        "user_id": 1,
        "client_id": 1,
        "project_id": 1,
        "date": date(2024, 3, 15),
        "hours": Decimal("4.5"),
        "description": "design review",
    }


@pytest.fixture
def sql_engine():
    """SQLite in-memory engine shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sql_engine):
    return sessionmaker(bind=sql_engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def sql_uow(session_factory):
    return SQLAlchemyUnitOfWork(session_factory)


@pytest.fixture
def api_client(session_factory, clock):
    """TestClient whose requests run against the in-memory SQLite database."""
    from app.main import app
    from app.infrastructure.web.dependencies import get_unit_of_work, get_clock

    app.dependency_overrides[get_unit_of_work] = lambda: SQLAlchemyUnitOfWork(session_factory)
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
