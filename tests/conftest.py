"""
Shared test fixtures: in-memory SQLite database, test client, fake clock, stub catalog source.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Point settings at throwaway storage before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PRICE_CATALOG_URL"] = ""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tankquote.database import Base
from tankquote.main import app
from tankquote.price_catalog import PriceCache, PriceCatalog, CatalogFetchError
from tankquote.routers.prices import get_price_cache
from tankquote.schemas import TankSpecification


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

T0 = datetime(2025, 1, 1, 8, 0, 0, tzinfo=timezone.utc)

SAMPLE_ROWS = [
    {"sku": "1B3-m-S2", "market_final_price": 410.0, "description": "Base Panel 3mm SS316"},
    {"sku": "1BCL3-m-S2", "market_final_price": 455.0, "description": "Base Corner Left 3mm SS316"},
    {"sku": "1BCR3-m-S2", "market_final_price": 455.0, "description": "Base Corner Right 3mm SS316"},
    {"sku": "1A3-m-S2", "market_final_price": 400.0, "description": "Panel A 3mm SS316"},
    {"sku": "2B6-m-S2", "market_final_price": 720.0, "description": "Panel B 6mm SS316"},
    {"sku": "2A6-m-S2", "market_final_price": 700.0, "description": "Panel A 6mm SS316"},
    {"sku": "2R15-m-S2", "market_final_price": 180.0, "description": "Roof 1.5mm SS316"},
    {"sku": "BN300ABNM10025", "market_final_price": 1.2, "description": "SS316 Bolts & Nuts M10 x 25MM"},
    {"sku": "3S30-FRP", "market_final_price": 260.0, "description": "FRP Sidewall S30"},
    {"sku": "3S30-FRP-A", "market_final_price": 250.0, "description": "FRP Sidewall S30 A"},
    {"sku": "3B30-FRP", "market_final_price": 240.0, "description": "FRP Base B30"},
    {"sku": "3F00-FRP", "market_final_price": 90.0, "description": "FRP Flat Roof"},
    {"sku": "3PF30-FRP-A", "market_final_price": 230.0, "description": "FRP Partition PF30"},
    {"sku": "CA-30-FRP", "market_final_price": 55.0, "description": "FRP Corner Angle 3.0m"},
    {"sku": "OUT-OF-STOCK", "market_final_price": 0, "description": "Zero price row"},
]


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class StubSource:
    """Catalog source returning fixed rows; counts fetches; can be told to fail."""

    def __init__(self, rows=None, fail: bool = False):
        self.rows = list(SAMPLE_ROWS if rows is None else rows)
        self.fail = fail
        self.calls = 0

    def fetch_rows(self) -> list:
        self.calls += 1
        if self.fail:
            raise CatalogFetchError("catalog unreachable")
        return list(self.rows)


def make_spec(**overrides) -> TankSpecification:
    """A valid 5 x 5 x 3 SS316 metric tank, overridable per test."""
    data = {"length": 5, "width": 5, "height": 3, "material": "SS316"}
    data.update(overrides)
    return TankSpecification(**data)


def items_by_sku(section: list) -> dict:
    """Sum quantities per SKU (a SKU may appear on more than one line)."""
    totals = {}
    for item in section:
        totals[item["sku"]] = totals.get(item["sku"], 0) + item["quantity"]
    return totals


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def stub_source():
    return StubSource()


@pytest.fixture
def catalog():
    return PriceCatalog.from_rows(SAMPLE_ROWS, loaded_at=T0)


@pytest.fixture
def price_cache(stub_source, fake_clock):
    return PriceCache(stub_source, ttl_seconds=300, clock=fake_clock)


@pytest.fixture
def db():
    """Direct database session; tables created before and dropped after."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(price_cache):
    """FastAPI test client wired to the stub catalog."""
    app.dependency_overrides[get_price_cache] = lambda: price_cache
    yield TestClient(app)
    app.dependency_overrides.clear()
