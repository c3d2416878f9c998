"""Core package for the TradeLog trade ledger service."""

__version__ = "1.0.0"

from .domain import PortfolioItem, Role, Trade, TradeSide
from .services.positions import aggregate_portfolio, calculate_position

__all__ = [
    "PortfolioItem",
    "Role",
    "Trade",
    "TradeSide",
    "aggregate_portfolio",
    "calculate_position",
]
