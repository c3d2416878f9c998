"""Registration, login, token refresh and admin promotion."""

from __future__ import annotations

import hmac
import logging

from tradelog.core.errors import (
    DuplicateUserError,
    InvalidAdminSecretError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidTokenError,
    UserNotFoundError,
)
from tradelog.domain import Identity, Role, TokenPair, UserAccount
from tradelog.ports import CredentialIssuer, UserStore
from tradelog.services.deadline import with_deadline

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(
        self,
        users: UserStore,
        credentials: CredentialIssuer,
        *,
        admin_secret: str = "",
        timeout: float | None = None,
    ) -> None:
        self._users = users
        self._credentials = credentials
        self._admin_secret = admin_secret
        self._timeout = timeout

    async def register(self, email: str, password: str) -> UserAccount:
        normalized_email = normalize_email(email)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordError(MIN_PASSWORD_LENGTH)

        existing = await with_deadline(self._users.get_by_email(normalized_email), self._timeout, "find user")
        if existing is not None:
            raise DuplicateUserError(normalized_email)

        password_hash = self._credentials.hash_password(password)
        user = await with_deadline(
            self._users.create(normalized_email, password_hash, Role.USER), self._timeout, "create user"
        )
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> tuple[UserAccount, TokenPair]:
        normalized_email = normalize_email(email)
        user = await with_deadline(self._users.get_by_email(normalized_email), self._timeout, "find user")
        if user is None or not self._credentials.verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()
        return user, self._credentials.issue_pair(user.id, user.role)

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new pair.

        The subject is carried forward and its role is re-read from the user
        store, so a promoted user keeps admin rights after refreshing.
        """

        claims = self._credentials.decode_refresh(refresh_token)
        user = await with_deadline(self._users.get_by_id(claims.subject), self._timeout, "find user")
        if user is None:
            raise InvalidTokenError("Invalid refresh token")
        return self._credentials.issue_pair(user.id, user.role)

    def authenticate(self, access_token: str) -> Identity:
        claims = self._credentials.decode_access(access_token)
        if claims.role is None:
            raise InvalidTokenError("Invalid token claims")
        return Identity(user_id=claims.subject, role=claims.role)

    async def promote_to_admin(self, user_id: int, secret: str) -> UserAccount:
        if not self._admin_secret or not hmac.compare_digest(secret.encode(), self._admin_secret.encode()):
            logger.warning("Rejected admin promotion for user %s", user_id)
            raise InvalidAdminSecretError()

        user = await with_deadline(self._users.get_by_id(user_id), self._timeout, "find user")
        if user is None:
            raise UserNotFoundError(user_id)
        promoted = await with_deadline(self._users.set_role(user_id, Role.ADMIN), self._timeout, "update user")
        logger.info("Promoted user %s to admin", user_id)
        return promoted


__all__ = ["AuthService", "MIN_PASSWORD_LENGTH", "normalize_email"]
