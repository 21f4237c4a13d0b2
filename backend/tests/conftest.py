"""Pytest configuration and fixtures."""

from datetime import datetime, timezone, timedelta
from typing import Dict, List, Optional

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from verto.main import app
from verto.models import Base, get_session
from verto.services.asset_detail import AssetDetailState, get_asset_detail_state
from verto.services.market_data import Asset, HistoryPoint, Interval, MarketDataError
from verto.services.market_list import MarketListState, get_market_list_state


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def create_asset(
    asset_id: str = "bitcoin",
    market_cap: Optional[float] = 1_000_000.0,
    price: float = 100.0,
    change: Optional[float] = 1.0,
) -> Asset:
    """Create an asset snapshot."""
    return Asset(
        id=asset_id,
        symbol=asset_id[:3],
        name=asset_id.title(),
        current_price=price,
        image=f"https://example.com/{asset_id}.png",
        market_cap=market_cap,
        price_change_percentage_24h=change,
    )


def create_page(page: int, size: int, page_size: int = 50) -> List[Asset]:
    """Create a page of assets with market caps decreasing across pages."""
    first = (page - 1) * page_size
    return [
        create_asset(
            asset_id=f"coin-{first + i}",
            market_cap=1_000_000.0 - (first + i),
            price=float(first + i + 1),
        )
        for i in range(size)
    ]


def create_history(count: int, step_minutes: int = 60, start_price: float = 100.0) -> List[HistoryPoint]:
    """Create an evenly spaced price series starting at BASE_TIME."""
    return [
        HistoryPoint(
            timestamp=BASE_TIME + timedelta(minutes=step_minutes * i),
            price=start_price + i,
        )
        for i in range(count)
    ]


class FakeMarketDataClient:
    """In-memory stand-in for MarketDataClient."""

    def __init__(self):
        self.pages: Dict[int, List[Asset]] = {}
        self.histories: Dict[tuple, List[HistoryPoint]] = {}
        self.fail = False
        self.market_calls: List[tuple] = []
        self.history_calls: List[tuple] = []

    async def fetch_markets(self, page: int, per_page: int = 50) -> List[Asset]:
        self.market_calls.append((page, per_page))
        if self.fail:
            raise MarketDataError("Market data API returned 503")
        return list(self.pages.get(page, []))

    async def fetch_history(self, asset_id: str, interval: Interval) -> List[HistoryPoint]:
        self.history_calls.append((asset_id, interval))
        if self.fail:
            raise MarketDataError("Market data API returned 503")
        return list(self.histories.get((asset_id, interval), []))


@pytest.fixture
def fake_client():
    """Create a fake market data client."""
    return FakeMarketDataClient()


@pytest.fixture
def market_list(fake_client):
    """Create a market list state backed by the fake client."""
    return MarketListState(fake_client, page_size=50, near_end_threshold=10)


@pytest.fixture
def asset_detail(fake_client):
    """Create an asset detail state backed by the fake client."""
    return AssetDetailState(fake_client)


@pytest.fixture(scope="function")
async def test_db():
    """Create a fresh test database for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def client(test_db, market_list, asset_detail):
    """Create test client with test database and fake market data."""

    async def override_get_session():
        yield test_db

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_market_list_state] = lambda: market_list
    app.dependency_overrides[get_asset_detail_state] = lambda: asset_detail

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
