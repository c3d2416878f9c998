"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from tradelog.api.dependencies import AccessGate
from tradelog.config import AppSettings
from tradelog.services import AuthService, TradeService

from .auth import get_auth_router
from .portfolio import get_portfolio_router
from .trades import get_trades_router


def build_api_router(
    settings: AppSettings, auth_service: AuthService, trade_service: TradeService, gate: AccessGate
) -> APIRouter:
    api_router = APIRouter(prefix=settings.api_prefix)
    api_router.include_router(get_auth_router(auth_service, gate, settings))
    api_router.include_router(get_trades_router(trade_service, gate))
    api_router.include_router(get_portfolio_router(trade_service, gate))
    return api_router


__all__ = ["build_api_router", "get_auth_router", "get_portfolio_router", "get_trades_router"]
