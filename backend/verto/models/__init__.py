# Database Models

from .database import Base, configure_database, get_session, init_db
from .portfolio import PortfolioPosition
from .setting import Setting

__all__ = [
    "Base",
    "configure_database",
    "get_session",
    "init_db",
    "PortfolioPosition",
    "Setting",
]
