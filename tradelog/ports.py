"""
Port interfaces (ABCs) for the ledger services.

Ports define the contracts the services need from storage and from the
credential machinery. Concrete adapters live in ``tradelog.stores`` and
``tradelog.security``; the services never import them directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from tradelog.domain import NewTrade, Role, TokenClaims, TokenPair, Trade, UserAccount


class LedgerStore(ABC):
    """Append-only storage of trades, queryable by user."""

    @abstractmethod
    async def append(self, trade: NewTrade) -> Trade:
        """Persist a new trade and return it with its assigned id.

        Raises:
            StoreError: when the write fails. Nothing is persisted.
        """
        raise NotImplementedError

    @abstractmethod
    async def list_for_user(self, user_id: int) -> list[Trade]:
        """Return every live (not soft-deleted) trade owned by ``user_id``."""
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> list[Trade]:
        """Return every live trade across all users."""
        raise NotImplementedError


class UserStore(ABC):
    """Persistence of user accounts."""

    @abstractmethod
    async def create(self, email: str, password_hash: str, role: Role = Role.USER) -> UserAccount:
        """Insert a user.

        Raises:
            DuplicateUserError: when the email is already registered.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        raise NotImplementedError

    @abstractmethod
    async def set_role(self, user_id: int, role: Role) -> UserAccount:
        """Change a user's role.

        Raises:
            UserNotFoundError: when no such user exists.
        """
        raise NotImplementedError


class CredentialIssuer(ABC):
    """Password hashing plus issuing and decoding of signed tokens."""

    @abstractmethod
    def hash_password(self, plain_password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def issue_pair(self, user_id: int, role: Role) -> TokenPair:
        raise NotImplementedError

    @abstractmethod
    def decode_access(self, token: str) -> TokenClaims:
        """Decode an access token into typed claims.

        Raises:
            InvalidTokenError: bad signature, expiry or claim shape.
        """
        raise NotImplementedError

    @abstractmethod
    def decode_refresh(self, token: str) -> TokenClaims:
        """Decode a refresh token into typed claims (``role`` is ``None``).

        Raises:
            InvalidTokenError: bad signature, expiry or claim shape.
        """
        raise NotImplementedError


__all__ = ["CredentialIssuer", "LedgerStore", "UserStore"]
