"""Portfolio ledger API endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, Field

from ..exceptions import PositionNotFoundError
from ..models import get_session
from ..services.market_list import MarketListState, get_market_list_state
from ..services.portfolio import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


class PositionCreate(BaseModel):
    """Portfolio position creation request."""
    asset_id: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    amount: float = Field(gt=0)
    buy_price: float = Field(ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)


class PositionUpdate(BaseModel):
    """Portfolio position update request."""
    amount: Optional[float] = Field(default=None, gt=0)
    buy_price: Optional[float] = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)


@router.get("/positions")
async def list_positions(session: AsyncSession = Depends(get_session)):
    """List all positions with derived value and profit."""
    service = PortfolioService(session)
    return [position.to_dict() for position in await service.list_positions()]


@router.post("/positions", status_code=201)
async def add_position(
    request: PositionCreate,
    session: AsyncSession = Depends(get_session),
    market_list: MarketListState = Depends(get_market_list_state),
):
    """Add a position.

    If no current price is given, the held market list is consulted before
    falling back to the buy price.
    """
    current_price = request.current_price
    if current_price is None:
        asset = market_list.find(request.asset_id)
        if asset is not None:
            current_price = asset.price

    service = PortfolioService(session)
    position = await service.add_position(
        asset_id=request.asset_id,
        symbol=request.symbol,
        amount=request.amount,
        buy_price=request.buy_price,
        current_price=current_price,
    )
    return position.to_dict()


@router.put("/positions/{position_id}")
async def update_position(
    position_id: int,
    request: PositionUpdate,
    session: AsyncSession = Depends(get_session),
):
    """Update amount, buy price or current price of a position."""
    service = PortfolioService(session)
    try:
        position = await service.update_position(
            position_id,
            amount=request.amount,
            buy_price=request.buy_price,
            current_price=request.current_price,
        )
    except PositionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return position.to_dict()


@router.delete("/positions/{position_id}")
async def delete_position(
    position_id: int,
    session: AsyncSession = Depends(get_session),
):
    """Delete a position."""
    service = PortfolioService(session)
    try:
        await service.remove_position(position_id)
    except PositionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"message": "Portfolio position deleted successfully"}


@router.get("/summary")
async def get_summary(session: AsyncSession = Depends(get_session)):
    """Totals across all positions."""
    service = PortfolioService(session)
    summary = await service.get_summary()
    return summary.to_dict()


@router.post("/mark-to-market")
async def mark_to_market(
    session: AsyncSession = Depends(get_session),
    market_list: MarketListState = Depends(get_market_list_state),
):
    """Refresh position prices from the held market list."""
    service = PortfolioService(session)
    updated = await service.mark_to_market(market_list.assets)
    summary = await service.get_summary()
    return {"updated": updated, "summary": summary.to_dict()}
