"""Market data client for the CoinGecko REST API.

Two read-only endpoints are used:
- /coins/markets: paginated asset listing, ordered by market cap descending
- /coins/{id}/market_chart: historical price series for one asset

Every failure (transport, non-2xx status, unexpected payload shape) is
raised as a single MarketDataError. Nothing is cached or retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

import aiohttp

from ..exceptions import MarketDataError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_VS_CURRENCY = "usd"
DEFAULT_PAGE_SIZE = 50


class Interval(str, Enum):
    """Lookback window for historical price queries."""
    DAY = "1D"
    WEEK = "7D"
    MONTH = "1M"
    THREE_MONTHS = "3M"
    YEAR = "1Y"
    ALL = "All"

    @property
    def days_param(self) -> str:
        """Value of the `days` query parameter for this interval."""
        return _DAYS_PARAMS[self]


_DAYS_PARAMS = {
    Interval.DAY: "1",
    Interval.WEEK: "7",
    Interval.MONTH: "30",
    Interval.THREE_MONTHS: "90",
    Interval.YEAR: "365",
    Interval.ALL: "max",
}


@dataclass(frozen=True)
class Asset:
    """A single tradable cryptocurrency snapshot."""
    id: str
    symbol: str
    name: str
    current_price: float
    image: Optional[str] = None
    market_cap: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None

    @property
    def percent_change(self) -> float:
        return self.price_change_percentage_24h or 0.0

    @property
    def price(self) -> float:
        return self.current_price

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Asset":
        """Build an asset from one element of the /coins/markets response."""
        return cls(
            id=str(payload["id"]),
            symbol=str(payload["symbol"]),
            name=str(payload["name"]),
            current_price=float(payload["current_price"]),
            image=payload.get("image"),
            market_cap=_optional_float(payload.get("market_cap")),
            price_change_percentage_24h=_optional_float(
                payload.get("price_change_percentage_24h")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "image": self.image,
            "current_price": self.current_price,
            "market_cap": self.market_cap,
            "price_change_percentage_24h": self.price_change_percentage_24h,
            "percent_change": self.percent_change,
        }


@dataclass(frozen=True)
class HistoryPoint:
    """One (timestamp, price) sample of a historical series."""
    timestamp: datetime
    price: float

    @classmethod
    def from_pair(cls, pair: List[Any]) -> "HistoryPoint":
        """Build a point from a raw [epoch_millis, price] pair."""
        if not isinstance(pair, (list, tuple)) or len(pair) < 2:
            raise ValueError(f"Expected [epoch_millis, price], got {pair!r}")
        millis, price = pair[0], pair[1]
        return cls(
            timestamp=datetime.fromtimestamp(float(millis) / 1000, tz=timezone.utc),
            price=float(price),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "price": self.price}


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


class MarketDataClient:
    """Async client for the market listing and market chart endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        vs_currency: str = DEFAULT_VS_CURRENCY,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            vs_currency: Quote currency for prices and market caps
            timeout_seconds: Total request timeout; None keeps aiohttp's default
            session: Optional shared session. When omitted, a session is
                opened per request.
        """
        self.base_url = base_url.rstrip("/")
        self.vs_currency = vs_currency
        self.timeout_seconds = timeout_seconds
        self._session = session

    def apply_config(self, config) -> None:
        """Pick up the `market_data` section of a loaded ConfigService."""
        self.base_url = config.get("market_data.base_url", self.base_url).rstrip("/")
        self.vs_currency = config.get("market_data.vs_currency", self.vs_currency)
        self.timeout_seconds = config.get("market_data.timeout_seconds", self.timeout_seconds)

    async def fetch_markets(self, page: int, per_page: int = DEFAULT_PAGE_SIZE) -> List[Asset]:
        """Fetch one page of assets ordered by descending market cap.

        Raises:
            MarketDataError: On any transport, status or decode failure.
        """
        params = {
            "vs_currency": self.vs_currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        payload = await self._get_json("/coins/markets", params)

        try:
            if not isinstance(payload, list):
                raise TypeError(f"Expected a list of assets, got {type(payload).__name__}")
            assets = [Asset.from_payload(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise MarketDataError(f"Malformed market listing: {e}") from e

        logger.debug(f"Fetched {len(assets)} assets (page={page}, per_page={per_page})")
        return assets

    async def fetch_history(self, asset_id: str, interval: Interval) -> List[HistoryPoint]:
        """Fetch the chronologically ordered price series for one asset.

        Raises:
            MarketDataError: On any transport, status or decode failure.
        """
        params = {
            "vs_currency": self.vs_currency,
            "days": interval.days_param,
        }
        payload = await self._get_json(f"/coins/{asset_id}/market_chart", params)

        try:
            if not isinstance(payload, dict):
                raise TypeError(f"Expected an object, got {type(payload).__name__}")
            points = [HistoryPoint.from_pair(pair) for pair in payload.get("prices") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise MarketDataError(f"Malformed market chart for {asset_id}: {e}") from e

        logger.debug(f"Fetched {len(points)} history points for {asset_id} ({interval.value})")
        return points

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            if self._session is not None:
                return await self._request(self._session, url, params)
            async with aiohttp.ClientSession() as session:
                return await self._request(session, url, params)
        except MarketDataError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Market data request to {url} failed: {e}")
            raise MarketDataError(f"Request to {path} failed: {e}") from e

    async def _request(self, session, url: str, params: Dict[str, Any]) -> Any:
        kwargs: Dict[str, Any] = {"params": params}
        if self.timeout_seconds is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout_seconds)

        async with session.get(url, **kwargs) as resp:
            if resp.status < 200 or resp.status >= 300:
                raise MarketDataError(f"Market data API returned {resp.status}")
            return await resp.json()


# Global instance
market_data_client = MarketDataClient()
