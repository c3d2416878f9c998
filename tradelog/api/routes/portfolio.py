"""Portfolio endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tradelog.api.dependencies import AccessGate
from tradelog.domain import Identity
from tradelog.schemas import PortfolioItemSchema, PortfolioResponse
from tradelog.services import TradeService


def get_portfolio_router(trade_service: TradeService, gate: AccessGate) -> APIRouter:
    router = APIRouter(prefix="/portfolio", tags=["portfolio"])

    @router.get("", response_model=PortfolioResponse, summary="Current holdings")
    async def get_portfolio(identity: Identity = Depends(gate.current_identity)) -> PortfolioResponse:
        """Return open positions (quantity above zero), sorted by symbol."""
        items = await trade_service.get_portfolio(identity.user_id)
        return PortfolioResponse(data=[PortfolioItemSchema.from_item(item) for item in items])

    return router


__all__ = ["get_portfolio_router"]
