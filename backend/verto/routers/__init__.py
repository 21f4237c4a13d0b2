# API Routers

from . import health, config, markets, detail, portfolio, settings, map

__all__ = ["health", "config", "markets", "detail", "portfolio", "settings", "map"]
