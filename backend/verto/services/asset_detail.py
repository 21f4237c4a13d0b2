"""Asset detail state.

Holds the historical price series of one asset for one interval, plus the
point currently highlighted by an interactive chart.

The manager owns the task of its outstanding fetch. Selecting a new asset or
interval while a fetch is running cancels that task, so the last request
always wins.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from .market_data import (
    HistoryPoint,
    Interval,
    MarketDataClient,
    MarketDataError,
    market_data_client,
)
from .market_list import LoadState

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = Interval.WEEK


def nearest_point(points: Sequence[HistoryPoint], when: datetime) -> Optional[HistoryPoint]:
    """Return the point whose timestamp is closest to `when`.

    Linear scan; on equal distance the earlier point in the sequence wins.
    Returns None for an empty series.
    """
    best: Optional[HistoryPoint] = None
    best_distance = 0.0
    for point in points:
        distance = abs((point.timestamp - when).total_seconds())
        if best is None or distance < best_distance:
            best = point
            best_distance = distance
    return best


class AssetDetailState:
    """Historical series for a single selected asset and interval."""

    def __init__(self, client: MarketDataClient):
        self._client = client
        self._task: Optional[asyncio.Task] = None
        self._requested_asset_id: Optional[str] = None

        self.asset_id: Optional[str] = None
        self.interval = DEFAULT_INTERVAL
        self.history: Tuple[HistoryPoint, ...] = ()
        self.selected_point: Optional[HistoryPoint] = None
        self.state = LoadState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.LOADING

    @property
    def requested_asset_id(self) -> Optional[str]:
        """Asset of the latest select, loaded or still in flight."""
        return self._requested_asset_id

    async def select(self, asset_id: str, interval: Optional[Interval] = None) -> bool:
        """Fetch the series for an asset and interval.

        Args:
            asset_id: Asset identifier
            interval: Lookback window; defaults to the current interval

        Returns:
            True if the held series was replaced, False if the fetch failed
            or was superseded by a newer request.
        """
        interval = interval or self.interval
        self.cancel()

        task = asyncio.create_task(self._client.fetch_history(asset_id, interval))
        self._task = task
        self._requested_asset_id = asset_id
        self.state = LoadState.LOADING

        try:
            points = await task
        except asyncio.CancelledError:
            if self._task is not task and task.cancelled():
                logger.debug(f"History fetch for {asset_id} ({interval.value}) superseded")
                return False
            raise
        except MarketDataError as e:
            logger.warning(f"Failed to load history for {asset_id} ({interval.value}): {e}")
            return False
        else:
            if self._task is not task:
                return False
            self.asset_id = asset_id
            self.interval = interval
            self.history = tuple(points)
            self.selected_point = None
            logger.info(f"Loaded {len(points)} history points for {asset_id} ({interval.value})")
            return True
        finally:
            self._finish(task)

    async def change_interval(self, interval: Interval) -> bool:
        """Refetch the series of the requested asset for a new interval."""
        if self._requested_asset_id is None:
            logger.debug("No asset selected, ignoring interval change")
            return False
        return await self.select(self._requested_asset_id, interval)

    def pick_nearest(self, when: datetime) -> Optional[HistoryPoint]:
        """Highlight the held point closest to `when`."""
        self.selected_point = nearest_point(self.history, when)
        return self.selected_point

    def cancel(self) -> None:
        """Cancel the outstanding fetch, if any. The held series is kept."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self._requested_asset_id = self.asset_id
        self._task = None
        self.state = LoadState.IDLE

    def _finish(self, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None
            self.state = LoadState.IDLE

    def to_dict(self) -> Dict[str, Any]:
        """Convert held state to a dictionary for API responses."""
        return {
            "asset_id": self.asset_id,
            "requested_asset_id": self._requested_asset_id,
            "interval": self.interval.value,
            "history": [point.to_dict() for point in self.history],
            "selected_point": self.selected_point.to_dict() if self.selected_point else None,
            "state": self.state.value,
            "is_loading": self.is_loading,
        }


# Global instance
asset_detail_state = AssetDetailState(market_data_client)


def get_asset_detail_state() -> AssetDetailState:
    """Dependency for the shared asset detail state."""
    return asset_detail_state
