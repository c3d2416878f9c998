"""Authentication helpers for API routes."""

from __future__ import annotations

from fastapi import Depends, Header

from tradelog.core.errors import AdminRequiredError, InvalidTokenError
from tradelog.domain import Identity
from tradelog.services import AuthService


class AccessGate:
    """FastAPI dependencies that turn a bearer token into an :class:`Identity`.

    ``current_identity`` authenticates any valid access token;
    ``admin_identity`` additionally requires the admin role.
    """

    def __init__(self, auth_service: AuthService) -> None:
        async def current_identity(authorization: str | None = Header(default=None)) -> Identity:
            if not authorization:
                raise InvalidTokenError("Authorization header required")
            scheme, _, token = authorization.partition(" ")
            token = token.strip()
            if scheme.lower() != "bearer" or not token or " " in token:
                raise InvalidTokenError("Invalid authorization header format")
            return auth_service.authenticate(token)

        async def admin_identity(identity: Identity = Depends(current_identity)) -> Identity:
            if not identity.is_admin:
                raise AdminRequiredError()
            return identity

        self.current_identity = current_identity
        self.admin_identity = admin_identity


__all__ = ["AccessGate"]
