"""Verto FastAPI Application.

Serves the state behind each screen of the Verto client: market list,
asset detail chart, crypto map, portfolio ledger and settings.
"""

import sys
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .models import configure_database, init_db
from .routers import health, config as config_router, markets, detail, portfolio, settings, map
from .services.asset_detail import asset_detail_state
from .services.config import config_service, ConfigValidationException
from .services.logging_service import setup_logging_from_config
from .services.market_data import market_data_client
from .services.market_list import market_list_state

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Validate configuration
    try:
        config_service.load_and_validate()
    except ConfigValidationException as e:
        print(f"FATAL: {e}")
        print("Server cannot start with invalid configuration.")
        sys.exit(1)

    setup_logging_from_config(config_service)
    logger.info("Configuration validated successfully")

    database_url = config_service.get("database.url")
    if database_url:
        configure_database(database_url)
    await init_db()
    logger.info("Database initialized")

    market_data_client.apply_config(config_service)
    market_list_state.page_size = config_service.get("market_data.page_size", market_list_state.page_size)
    market_list_state.near_end_threshold = config_service.get(
        "market_data.near_end_threshold", market_list_state.near_end_threshold
    )

    # First page, as the prices screen does on open; failures leave an empty list
    if not await market_list_state.load():
        logger.warning("Initial market list load failed; waiting for a manual refresh")

    yield

    asset_detail_state.cancel()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Verto API",
    description="Crypto market data, charts and portfolio ledger",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(config_router.router, prefix="/api/config", tags=["Config"])
app.include_router(markets.router, prefix="/api/markets", tags=["Markets"])
app.include_router(detail.router, prefix="/api/detail", tags=["Detail"])
app.include_router(portfolio.router, prefix="/api", tags=["Portfolio"])
app.include_router(settings.router, prefix="/api/settings", tags=["Settings"])
app.include_router(map.router, prefix="/api/map", tags=["Map"])


@app.get("/")
async def root():
    """Root endpoint redirect to docs."""
    return {"message": "Verto API", "docs": "/docs"}
