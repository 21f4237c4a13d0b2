"""Market list API router.

Exposes the held market list and the actions that change it. A failed
fetch is not an HTTP error: the response carries `success: false` and the
unchanged held state, so the client can keep showing what it had.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.market_list import MarketListState, SortOption, get_market_list_state

router = APIRouter()


class LoadRequest(BaseModel):
    """Request to load the next page, or the first page when reset."""
    reset: bool = False


class SortRequest(BaseModel):
    """Request to change the active sort key."""
    sort_option: SortOption


def _result(state: MarketListState, success: bool) -> Dict[str, Any]:
    return {"success": success, **state.to_dict()}


@router.get("")
async def get_markets(state: MarketListState = Depends(get_market_list_state)):
    """Get the held market list and its paging state."""
    return state.to_dict()


@router.post("/load")
async def load_markets(
    request: LoadRequest = LoadRequest(),
    state: MarketListState = Depends(get_market_list_state),
):
    """Load the next page (or reload from the first page)."""
    success = await state.load(reset=request.reset)
    return _result(state, success)


@router.post("/refresh")
async def refresh_markets(state: MarketListState = Depends(get_market_list_state)):
    """Pull-to-refresh: reload from the first page."""
    success = await state.refresh()
    return _result(state, success)


@router.put("/sort")
async def change_sort(
    request: SortRequest,
    state: MarketListState = Depends(get_market_list_state),
):
    """Re-order the held list without refetching."""
    state.change_sort(request.sort_option)
    return state.to_dict()


@router.post("/appeared/{asset_id}")
async def asset_appeared(
    asset_id: str,
    state: MarketListState = Depends(get_market_list_state),
):
    """Report that an asset row became visible; may load the next page."""
    loaded = await state.on_item_appeared(asset_id)
    return {"loaded": loaded, **state.to_dict()}
