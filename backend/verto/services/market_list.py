"""Market list state.

Holds the accumulated asset list, the page cursor, the end-of-data flag and
the active sort key. Pagination is driven by the presentation layer reporting
which asset has just become visible; a new page is requested when that asset
is near the end of the held list.

Only one fetch may be outstanding at a time. Overlapping calls are dropped,
not queued.
"""

import logging
from enum import Enum
from typing import Any, Dict, List

from .market_data import (
    DEFAULT_PAGE_SIZE,
    Asset,
    MarketDataClient,
    MarketDataError,
    market_data_client,
)

logger = logging.getLogger(__name__)

DEFAULT_NEAR_END_THRESHOLD = 10


class LoadState(str, Enum):
    """Fetch state of a state manager."""
    IDLE = "idle"
    LOADING = "loading"
    REFRESHING = "refreshing"


class SortOption(str, Enum):
    """Sort keys for the market list. All sort descending."""
    MARKET_CAP = "Market Cap"
    PRICE = "Price"
    PERCENT_CHANGE = "% Change"

    def sort_key(self, asset: Asset) -> float:
        if self is SortOption.MARKET_CAP:
            return asset.market_cap or 0.0
        if self is SortOption.PRICE:
            return asset.price
        return asset.percent_change


def sort_assets(assets: List[Asset], option: SortOption) -> List[Asset]:
    """Return assets ordered descending by the option's key.

    Assets with equal keys keep their relative order.
    """
    return sorted(assets, key=option.sort_key, reverse=True)


class MarketListState:
    """Paginated, sortable list of assets backed by a MarketDataClient."""

    def __init__(
        self,
        client: MarketDataClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        near_end_threshold: int = DEFAULT_NEAR_END_THRESHOLD,
    ):
        self._client = client
        self.page_size = page_size
        self.near_end_threshold = near_end_threshold

        self.assets: List[Asset] = []
        self.page = 1
        self.has_more = True
        self.sort_option = SortOption.MARKET_CAP
        self.state = LoadState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.LOADING

    @property
    def is_refreshing(self) -> bool:
        return self.state == LoadState.REFRESHING

    async def load(self, reset: bool = False) -> bool:
        """Fetch the next page, or the first page again when reset.

        Returns:
            True if the held list was updated, False if the call was dropped
            or the fetch failed.
        """
        return await self._fetch(reset=reset, state=LoadState.LOADING)

    async def refresh(self) -> bool:
        """Reload from the first page, flagged as a pull-to-refresh."""
        return await self._fetch(reset=True, state=LoadState.REFRESHING)

    async def on_item_appeared(self, asset_id: str) -> bool:
        """Load the next page if the given asset is near the end of the list.

        Returns:
            True if a page load was started and succeeded.
        """
        if self.state != LoadState.IDLE or not self.has_more:
            return False

        trigger_index = max(len(self.assets) - self.near_end_threshold, 0)
        if trigger_index >= len(self.assets) or self.assets[trigger_index].id != asset_id:
            return False

        logger.debug(f"Asset {asset_id} reached pagination threshold, loading page {self.page}")
        return await self.load(reset=False)

    def change_sort(self, option: SortOption) -> None:
        """Re-order the held list by a new key without refetching."""
        self.sort_option = option
        self.assets = sort_assets(self.assets, option)

    async def _fetch(self, reset: bool, state: LoadState) -> bool:
        if self.state != LoadState.IDLE:
            logger.debug(f"Dropping {state.value} request, already {self.state.value}")
            return False

        page = 1 if reset else self.page
        self.state = state
        try:
            results = await self._client.fetch_markets(page=page, per_page=self.page_size)
        except MarketDataError as e:
            logger.warning(f"Failed to load market page {page}: {e}")
            return False
        finally:
            self.state = LoadState.IDLE

        combined = list(results) if reset else self.assets + list(results)
        self.assets = sort_assets(combined, self.sort_option)

        if len(results) >= self.page_size:
            self.page = page + 1
            self.has_more = True
        else:
            self.page = page
            self.has_more = False

        logger.info(
            f"Loaded {len(results)} assets from page {page} "
            f"(held={len(self.assets)}, has_more={self.has_more})"
        )
        return True

    def find(self, asset_id: str):
        """Return the held asset with the given id, or None."""
        return next((asset for asset in self.assets if asset.id == asset_id), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert held state to a dictionary for API responses."""
        return {
            "assets": [asset.to_dict() for asset in self.assets],
            "page": self.page,
            "page_size": self.page_size,
            "has_more": self.has_more,
            "sort_option": self.sort_option.value,
            "state": self.state.value,
            "is_loading": self.is_loading,
            "is_refreshing": self.is_refreshing,
        }


# Global instance
market_list_state = MarketListState(market_data_client)


def get_market_list_state() -> MarketListState:
    """Dependency for the shared market list state."""
    return market_list_state
