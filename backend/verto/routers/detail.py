"""Asset detail API router: historical chart and point inspection."""

from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..services.asset_detail import AssetDetailState, get_asset_detail_state
from ..services.market_data import Interval

router = APIRouter()


class SelectRequest(BaseModel):
    """Request to show the chart of an asset."""
    asset_id: str
    interval: Optional[Interval] = None


class IntervalRequest(BaseModel):
    """Request to change the chart interval of the selected asset."""
    interval: Interval


class PickRequest(BaseModel):
    """Query time of a pointer/drag position on the chart."""
    timestamp: datetime


@router.get("")
async def get_detail(state: AssetDetailState = Depends(get_asset_detail_state)):
    """Get the held series, interval and highlighted point."""
    return state.to_dict()


@router.post("/select")
async def select_asset(
    request: SelectRequest,
    state: AssetDetailState = Depends(get_asset_detail_state),
):
    """Fetch the series for an asset and interval."""
    success = await state.select(request.asset_id, request.interval)
    return {"success": success, **state.to_dict()}


@router.put("/interval")
async def change_interval(
    request: IntervalRequest,
    state: AssetDetailState = Depends(get_asset_detail_state),
):
    """Refetch the selected asset's series for another interval."""
    if state.requested_asset_id is None:
        raise HTTPException(status_code=400, detail="No asset selected")
    success = await state.change_interval(request.interval)
    return {"success": success, **state.to_dict()}


@router.post("/pick")
async def pick_point(
    request: PickRequest,
    state: AssetDetailState = Depends(get_asset_detail_state),
):
    """Highlight the point closest to the given time."""
    when = request.timestamp
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    point = state.pick_nearest(when)
    return {"selected_point": point.to_dict() if point else None}
