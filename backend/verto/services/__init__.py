# Business Logic Services

from .market_data import (
    MarketDataClient,
    MarketDataError,
    market_data_client,
    Asset,
    HistoryPoint,
    Interval,
)
from .market_list import (
    MarketListState,
    market_list_state,
    get_market_list_state,
    LoadState,
    SortOption,
    sort_assets,
)
from .asset_detail import (
    AssetDetailState,
    asset_detail_state,
    get_asset_detail_state,
    nearest_point,
)
from .portfolio import (
    PortfolioService,
    PortfolioSummary,
)
from .settings import (
    SettingsService,
    AppSettings,
    CURRENCIES,
    REFRESH_RATE_OPTIONS,
)
from .config import (
    ConfigService,
    config_service,
    ConfigValidationException,
    ConfigValidationError,
)
from .logging_service import (
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    # Market data
    "MarketDataClient",
    "MarketDataError",
    "market_data_client",
    "Asset",
    "HistoryPoint",
    "Interval",
    # Market list
    "MarketListState",
    "market_list_state",
    "get_market_list_state",
    "LoadState",
    "SortOption",
    "sort_assets",
    # Asset detail
    "AssetDetailState",
    "asset_detail_state",
    "get_asset_detail_state",
    "nearest_point",
    # Portfolio
    "PortfolioService",
    "PortfolioSummary",
    # Settings
    "SettingsService",
    "AppSettings",
    "CURRENCIES",
    "REFRESH_RATE_OPTIONS",
    # Config
    "ConfigService",
    "config_service",
    "ConfigValidationException",
    "ConfigValidationError",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
]
