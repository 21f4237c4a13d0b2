"""Health check router."""

from fastapi import APIRouter, Depends

from .. import __version__
from ..services.market_list import MarketListState, get_market_list_state

router = APIRouter()


@router.get("/health")
async def health_check(market_list: MarketListState = Depends(get_market_list_state)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "verto",
        "version": __version__,
        "market_list_state": market_list.state.value,
    }
