"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- A fixed farm clock pinned to the seed date
- Seeded and empty record stores
- Sample submissions
- FastAPI test clients
"""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date
from typing import AsyncGenerator, Iterator
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from poultry_dashboard.domain.models import (
    EggCategoryProduction,
    EggProductionReportCreate,
    EggStock,
    FlockCreate,
)
from poultry_dashboard.infrastructure.clock import FixedClock
from poultry_dashboard.infrastructure.seed_data import SEED_DATE, build_seeded_store
from poultry_dashboard.main import create_app
from poultry_dashboard.services.domain.report_store import ReportStore


FARM_TZ = ZoneInfo("Asia/Karachi")


# ============================================================
# Clock and Store Fixtures
# ============================================================

@pytest.fixture
def today() -> date:
    """The farm's current day: the date the seed reports were recorded."""
    return SEED_DATE


@pytest.fixture
def fixed_clock(today) -> FixedClock:
    """Clock frozen at noon on ``today`` in the farm timezone."""
    return FixedClock.on(today, tz=FARM_TZ)


@pytest.fixture
def seeded_store(fixed_clock) -> ReportStore:
    """Store loaded with the startup dataset (flocks h1-h3)."""
    return build_seeded_store(fixed_clock)


@pytest.fixture
def empty_store(fixed_clock) -> ReportStore:
    """Store with no flocks, reports or inventory."""
    return ReportStore(clock=fixed_clock)


# ============================================================
# Sample Submission Fixtures
# ============================================================

@pytest.fixture
def flock_input() -> FlockCreate:
    return FlockCreate(
        name="H4",
        breed="Bovans Brown",
        arrival_date=date(2024, 5, 1),
        initial_bird_count=3000,
        cost_per_chick=130,
    )


@pytest.fixture
def egg_report_input(today) -> EggProductionReportCreate:
    """Report for h1 with 1 case of standard and 2 trays + 5 loose of medium."""
    return EggProductionReportCreate(
        date=today,
        flock_id="h1",
        standard=EggCategoryProduction(today=EggStock(case=1)),
        medium=EggCategoryProduction(today=EggStock(tray=2, loose=5)),
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(seeded_store, fixed_clock) -> Iterator[TestClient]:
    """Synchronous test client serving the seeded store."""
    app = create_app(store=seeded_store, clock=fixed_clock)
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def async_test_client(seeded_store, fixed_clock) -> AsyncGenerator[AsyncClient, None]:
    """Async test client; state is attached directly since the transport skips lifespan."""
    app = create_app(store=seeded_store, clock=fixed_clock)
    app.state.store = seeded_store
    app.state.clock = fixed_clock
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
