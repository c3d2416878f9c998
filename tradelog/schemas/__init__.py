"""Pydantic schemas for API payloads."""

from __future__ import annotations

from pydantic import BaseModel

from .auth import LoginRequest, MessageResponse, PromoteRequest, RegisterRequest, TokenResponse, UserOut
from .trades import PortfolioItemSchema, PortfolioResponse, TradeCreateRequest, TradeListResponse, TradeSchema


class HealthResponse(BaseModel):
    status: str
    db: str


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PortfolioItemSchema",
    "PortfolioResponse",
    "PromoteRequest",
    "RegisterRequest",
    "TokenResponse",
    "TradeCreateRequest",
    "TradeListResponse",
    "TradeSchema",
    "UserOut",
]
