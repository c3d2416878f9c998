"""Database model exports."""

from .trade import TRADE_TYPES, Trade
from .user import User

__all__ = [
    "TRADE_TYPES",
    "Trade",
    "User",
]
