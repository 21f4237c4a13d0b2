"""Portfolio position model for the local holdings ledger."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime

from .database import Base


class PortfolioPosition(Base):
    """A user-entered holding.

    Only amount, buy price and the last known market price are stored.
    Value, cost and profit are derived on read.
    """
    __tablename__ = "portfolio_positions"

    id = Column(Integer, primary_key=True, index=True)

    asset_id = Column(String(100), nullable=False, index=True)  # market data identifier, e.g. "bitcoin"
    symbol = Column(String(20), nullable=False)
    amount = Column(Float, nullable=False)
    buy_price = Column(Float, nullable=False)
    current_price = Column(Float, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<PortfolioPosition(id={self.id}, asset={self.asset_id}, amount={self.amount})>"

    @property
    def value(self) -> float:
        return self.amount * self.current_price

    @property
    def cost(self) -> float:
        return self.amount * self.buy_price

    @property
    def profit(self) -> float:
        return self.value - self.cost

    @property
    def profit_percent(self) -> float:
        """Profit as a percentage of cost; 0 when nothing was paid."""
        if self.cost == 0:
            return 0.0
        return self.profit / self.cost * 100

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "asset_id": self.asset_id,
            "symbol": self.symbol,
            "amount": self.amount,
            "buy_price": self.buy_price,
            "current_price": self.current_price,
            "value": self.value,
            "cost": self.cost,
            "profit": self.profit,
            "profit_percent": self.profit_percent,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
