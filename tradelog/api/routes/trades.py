"""Trade ledger endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from tradelog.api.dependencies import AccessGate
from tradelog.domain import Identity
from tradelog.schemas import (
    ErrorResponse,
    TradeCreateRequest,
    TradeListResponse,
    TradeSchema,
)
from tradelog.services import TradeService


def get_trades_router(trade_service: TradeService, gate: AccessGate) -> APIRouter:
    router = APIRouter(tags=["trades"])

    @router.post(
        "/trades",
        response_model=TradeSchema,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse}},
        summary="Create a new trade",
        description="Records a buy or sell order. SELL orders may not exceed the current position.",
    )
    async def create_trade(
        payload: TradeCreateRequest, identity: Identity = Depends(gate.current_identity)
    ) -> TradeSchema:
        trade = await trade_service.create_trade(
            identity.user_id,
            payload.symbol,
            payload.type,
            payload.price,
            payload.quantity,
            notes=payload.notes,
        )
        return TradeSchema.from_trade(trade)

    @router.get("/trades", response_model=TradeListResponse, summary="List the caller's trades")
    async def list_trades(identity: Identity = Depends(gate.current_identity)) -> TradeListResponse:
        trades = await trade_service.list_user_trades(identity.user_id)
        return TradeListResponse(data=[TradeSchema.from_trade(trade) for trade in trades])

    @router.get(
        "/admin/trades",
        response_model=TradeListResponse,
        responses={403: {"model": ErrorResponse}},
        summary="List all trades (admin only)",
    )
    @router.get("/trades/all", response_model=TradeListResponse, include_in_schema=False)
    async def list_all_trades(_admin: Identity = Depends(gate.admin_identity)) -> TradeListResponse:
        trades = await trade_service.list_all_trades()
        return TradeListResponse(data=[TradeSchema.from_trade(trade) for trade in trades])

    return router


__all__ = ["get_trades_router"]
