"""Security helpers for hashing passwords and issuing tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt
from passlib.context import CryptContext

from tradelog.config import AppSettings
from tradelog.core.errors import InvalidTokenError
from tradelog.domain import Role, TokenClaims, TokenPair
from tradelog.ports import CredentialIssuer

_ALGORITHM = "HS256"
_ACCESS_CLAIMS = ("sub", "role", "iat", "exp")
_REFRESH_CLAIMS = ("sub", "iat", "exp")


class JwtCredentialIssuer(CredentialIssuer):
    """bcrypt password hashes plus HS256 access/refresh token pairs."""

    def __init__(
        self,
        secret: str,
        refresh_secret: str,
        *,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        bcrypt_rounds: int = 12,
    ) -> None:
        self._secret = secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "JwtCredentialIssuer":
        return cls(
            settings.jwt_secret,
            settings.jwt_refresh_secret,
            access_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
            refresh_ttl=timedelta(days=settings.refresh_token_ttl_days),
            bcrypt_rounds=settings.password_hash_rounds,
        )

    def hash_password(self, plain_password: str) -> str:
        return self._pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        try:
            return self._pwd_context.verify(plain_password, password_hash)
        except ValueError:
            # Unrecognised or corrupted hash
            return False

    def issue_pair(self, user_id: int, role: Role) -> TokenPair:
        now = datetime.now(timezone.utc)
        access_claims = {
            "sub": str(user_id),
            "role": Role(role).value,
            "iat": now,
            "exp": now + self._access_ttl,
        }
        refresh_claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._refresh_ttl,
            "jti": uuid4().hex,
        }
        return TokenPair(
            access_token=jwt.encode(access_claims, self._secret, algorithm=_ALGORITHM),
            refresh_token=jwt.encode(refresh_claims, self._refresh_secret, algorithm=_ALGORITHM),
        )

    def decode_access(self, token: str) -> TokenClaims:
        payload = self._decode(token, self._secret, _ACCESS_CLAIMS)
        role_value = payload.get("role")
        try:
            role = Role(role_value)
        except ValueError as exc:
            raise InvalidTokenError("Invalid token claims") from exc
        return _claims_from_payload(payload, role)

    def decode_refresh(self, token: str) -> TokenClaims:
        payload = self._decode(token, self._refresh_secret, _REFRESH_CLAIMS)
        return _claims_from_payload(payload, None)

    @staticmethod
    def _decode(token: str, secret: str, required: tuple[str, ...]) -> dict[str, Any]:
        try:
            return jwt.decode(token, secret, algorithms=[_ALGORITHM], options={"require": list(required)})
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc


def _claims_from_payload(payload: dict[str, Any], role: Role | None) -> TokenClaims:
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        raise InvalidTokenError("Invalid token claims")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")
    if not isinstance(issued_at, (int, float)) or not isinstance(expires_at, (int, float)):
        raise InvalidTokenError("Invalid token claims")
    return TokenClaims(
        subject=int(subject),
        role=role,
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


__all__ = ["JwtCredentialIssuer"]
