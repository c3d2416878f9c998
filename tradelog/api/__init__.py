"""HTTP layer for the TradeLog service."""
