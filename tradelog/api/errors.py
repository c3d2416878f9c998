"""
Centralized error handlers for FastAPI.

Maps domain errors to HTTP responses. Storage failures and unexpected
exceptions are logged with their cause and answered with a generic message.
Every error body has the shape ``{"error": ..., "detail": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tradelog.core.errors import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleViolation,
    DuplicateUserError,
    NotFoundError,
    StoreError,
    StoreTimeoutError,
    TradeLogError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str | None = None, headers=None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", _describe_validation(exc))

    @app.exception_handler(ValidationError)
    async def handle_validation(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(DuplicateUserError)
    async def handle_duplicate_user(_request: Request, exc: DuplicateUserError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, "Email is already registered")

    @app.exception_handler(BusinessRuleViolation)
    async def handle_business_rule(_request: Request, exc: BusinessRuleViolation) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(_request: Request, exc: AuthenticationError) -> JSONResponse:
        return _error_response(
            status.HTTP_401_UNAUTHORIZED, exc.message, headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(AuthorizationError)
    async def handle_authorization(_request: Request, exc: AuthorizationError) -> JSONResponse:
        return _error_response(status.HTTP_403_FORBIDDEN, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("Not found: %s", exc.message)
        return _error_response(status.HTTP_404_NOT_FOUND, "Not found")

    @app.exception_handler(StoreTimeoutError)
    async def handle_store_timeout(_request: Request, exc: StoreTimeoutError) -> JSONResponse:
        logger.error("Store timeout: %s", exc.message)
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable", headers={"Retry-After": "1"}
        )

    @app.exception_handler(StoreError)
    async def handle_store(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure: %s", exc.message, exc_info=exc.__cause__)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(TradeLogError)
    async def handle_trade_log(_request: Request, exc: TradeLogError) -> JSONResponse:
        logger.error("Unhandled domain error: %s", exc.message)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


__all__ = ["register_error_handlers"]
