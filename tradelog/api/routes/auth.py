"""Authentication routes."""

from __future__ import annotations

from fastapi import APIRouter, Cookie, Depends, Response, status

from tradelog.api.dependencies import AccessGate
from tradelog.config import AppSettings
from tradelog.core.errors import InvalidTokenError
from tradelog.domain import Identity
from tradelog.schemas import (
    LoginRequest,
    MessageResponse,
    PromoteRequest,
    RegisterRequest,
    TokenResponse,
    UserOut,
)
from tradelog.services import AuthService


def get_auth_router(auth_service: AuthService, gate: AccessGate, settings: AppSettings) -> APIRouter:
    router = APIRouter(prefix="/auth", tags=["auth"])
    cookie_name = settings.refresh_cookie_name

    def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
        response.set_cookie(
            key=cookie_name,
            value=refresh_token,
            max_age=settings.refresh_cookie_max_age,
            path="/",
            secure=settings.refresh_cookie_secure,
            httponly=True,
            samesite="lax",
        )

    @router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
    async def register(payload: RegisterRequest) -> UserOut:
        user = await auth_service.register(payload.email, payload.password)
        return UserOut.from_account(user)

    @router.post("/login", response_model=TokenResponse)
    async def login(payload: LoginRequest, response: Response) -> TokenResponse:
        _, tokens = await auth_service.login(payload.email, payload.password)
        _set_refresh_cookie(response, tokens.refresh_token)
        return TokenResponse(access_token=tokens.access_token)

    @router.post("/refresh", response_model=TokenResponse)
    async def refresh(
        response: Response,
        refresh_token: str | None = Cookie(default=None, alias=cookie_name),
    ) -> TokenResponse:
        if not refresh_token:
            raise InvalidTokenError("Refresh token required")
        tokens = await auth_service.refresh(refresh_token)
        _set_refresh_cookie(response, tokens.refresh_token)
        return TokenResponse(access_token=tokens.access_token)

    @router.post("/logout", response_model=MessageResponse)
    async def logout(response: Response) -> MessageResponse:
        response.delete_cookie(
            key=cookie_name, path="/", secure=settings.refresh_cookie_secure, httponly=True, samesite="lax"
        )
        return MessageResponse(message="Logged out successfully")

    @router.post("/promote", response_model=UserOut)
    async def promote(payload: PromoteRequest, identity: Identity = Depends(gate.current_identity)) -> UserOut:
        user = await auth_service.promote_to_admin(identity.user_id, payload.secret)
        return UserOut.from_account(user)

    return router


__all__ = ["get_auth_router"]
