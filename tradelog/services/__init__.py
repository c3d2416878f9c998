"""Service layer exports."""

from .auth import AuthService
from .positions import aggregate_portfolio, calculate_position
from .trades import TradeService

__all__ = ["AuthService", "TradeService", "aggregate_portfolio", "calculate_position"]
