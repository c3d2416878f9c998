"""Pydantic schemas for trades and portfolio holdings."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from tradelog.domain import AMOUNT_PRECISION, AMOUNT_SCALE, PortfolioItem, Trade, TradeSide


class TradeCreateRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=32, examples=["BTC/USD"])
    type: TradeSide = Field(..., description="BUY or SELL")
    price: Decimal = Field(..., max_digits=AMOUNT_PRECISION, decimal_places=AMOUNT_SCALE, examples=["50000"])
    quantity: Decimal = Field(..., max_digits=AMOUNT_PRECISION, decimal_places=AMOUNT_SCALE, examples=["0.5"])
    notes: str | None = Field(default=None, max_length=1000)


class TradeSchema(BaseModel):
    id: int
    user_id: int
    symbol: str
    type: TradeSide
    price: Decimal
    quantity: Decimal
    notes: str | None = None
    executed_at: datetime

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeSchema":
        return cls(
            id=trade.id,
            user_id=trade.user_id,
            symbol=trade.symbol,
            type=trade.side,
            price=trade.price,
            quantity=trade.quantity,
            notes=trade.notes,
            executed_at=trade.executed_at,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": 1,
                "user_id": 1,
                "symbol": "BTC/USD",
                "type": "BUY",
                "price": "50000",
                "quantity": "0.5",
                "notes": "Initial position",
                "executed_at": "2024-03-01T10:00:00Z",
            }
        }
    }


class TradeListResponse(BaseModel):
    data: list[TradeSchema]


class PortfolioItemSchema(BaseModel):
    symbol: str
    quantity: Decimal
    value: Decimal

    @classmethod
    def from_item(cls, item: PortfolioItem) -> "PortfolioItemSchema":
        return cls(symbol=item.symbol, quantity=item.quantity, value=item.value)


class PortfolioResponse(BaseModel):
    data: list[PortfolioItemSchema]


__all__ = [
    "PortfolioItemSchema",
    "PortfolioResponse",
    "TradeCreateRequest",
    "TradeListResponse",
    "TradeSchema",
]
