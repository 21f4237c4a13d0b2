"""Verto: crypto market data, charts and a local portfolio ledger."""

__version__ = "1.0.0"
