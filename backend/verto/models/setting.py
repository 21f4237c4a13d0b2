"""Key-value settings model."""

from datetime import datetime
from sqlalchemy import Column, String, DateTime

from .database import Base


class Setting(Base):
    """One persisted user setting, stored as a string value."""
    __tablename__ = "settings"

    key = Column(String(50), primary_key=True)
    value = Column(String(100), nullable=False)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Setting(key={self.key}, value={self.value})>"
