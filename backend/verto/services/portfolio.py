"""Portfolio ledger service.

Keeps user-entered holdings in the local database. Current prices are taken
from assets already held by the market list; the ledger never fetches market
data on its own.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import PositionNotFoundError
from ..models import PortfolioPosition
from .market_data import Asset

logger = logging.getLogger(__name__)


@dataclass
class PortfolioSummary:
    """Totals across all positions."""
    position_count: int
    total_value: float
    total_cost: float
    total_profit: float
    total_profit_percent: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "position_count": self.position_count,
            "total_value": self.total_value,
            "total_cost": self.total_cost,
            "total_profit": self.total_profit,
            "total_profit_percent": self.total_profit_percent,
        }


def summarize(positions: Iterable[PortfolioPosition]) -> PortfolioSummary:
    """Aggregate value, cost and profit of a set of positions."""
    positions = list(positions)
    total_value = sum(p.value for p in positions)
    total_cost = sum(p.cost for p in positions)
    total_profit = total_value - total_cost
    total_profit_percent = total_profit / total_cost * 100 if total_cost else 0.0

    return PortfolioSummary(
        position_count=len(positions),
        total_value=total_value,
        total_cost=total_cost,
        total_profit=total_profit,
        total_profit_percent=total_profit_percent,
    )


class PortfolioService:
    """CRUD and valuation for portfolio positions."""

    def __init__(self, session: AsyncSession):
        """Initialize portfolio service.

        Args:
            session: Database session
        """
        self.session = session

    async def list_positions(self) -> List[PortfolioPosition]:
        result = await self.session.execute(
            select(PortfolioPosition).order_by(PortfolioPosition.id)
        )
        return list(result.scalars().all())

    async def get_position(self, position_id: int) -> PortfolioPosition:
        """Get a position by id.

        Raises:
            PositionNotFoundError: If no such position exists.
        """
        position = await self.session.get(PortfolioPosition, position_id)
        if position is None:
            raise PositionNotFoundError(position_id)
        return position

    async def add_position(
        self,
        asset_id: str,
        symbol: str,
        amount: float,
        buy_price: float,
        current_price: Optional[float] = None,
    ) -> PortfolioPosition:
        """Record a new holding.

        When no current price is known yet, the buy price is used until the
        next mark-to-market.
        """
        position = PortfolioPosition(
            asset_id=asset_id,
            symbol=symbol.upper(),
            amount=amount,
            buy_price=buy_price,
            current_price=buy_price if current_price is None else current_price,
        )
        self.session.add(position)
        await self.session.commit()
        await self.session.refresh(position)

        logger.info(f"Added portfolio position {position.id}: {amount} {position.symbol} @ {buy_price}")
        return position

    async def update_position(
        self,
        position_id: int,
        amount: Optional[float] = None,
        buy_price: Optional[float] = None,
        current_price: Optional[float] = None,
    ) -> PortfolioPosition:
        position = await self.get_position(position_id)

        if amount is not None:
            position.amount = amount
        if buy_price is not None:
            position.buy_price = buy_price
        if current_price is not None:
            position.current_price = current_price

        await self.session.commit()
        await self.session.refresh(position)
        return position

    async def remove_position(self, position_id: int) -> None:
        position = await self.get_position(position_id)
        await self.session.delete(position)
        await self.session.commit()
        logger.info(f"Removed portfolio position {position_id}")

    async def mark_to_market(self, assets: Iterable[Asset]) -> int:
        """Refresh current prices from held market data.

        Positions whose asset is not among `assets` keep their last price.

        Returns:
            Number of positions updated.
        """
        prices = {asset.id: asset.price for asset in assets}
        updated = 0
        for position in await self.list_positions():
            price = prices.get(position.asset_id)
            if price is not None and price != position.current_price:
                position.current_price = price
                updated += 1

        if updated:
            await self.session.commit()
        logger.debug(f"Marked {updated} portfolio position(s) to market")
        return updated

    async def get_summary(self) -> PortfolioSummary:
        return summarize(await self.list_positions())
