"""Domain models shared by the ledger services and their stores."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Ledger amounts are stored as NUMERIC(28, 10).
AMOUNT_PRECISION = 28
AMOUNT_SCALE = 10


class TradeSide(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class NewTrade:
    """A validated trade waiting to be appended to the ledger."""

    user_id: int
    symbol: str
    side: TradeSide
    price: Decimal
    quantity: Decimal
    executed_at: datetime
    notes: Optional[str] = None


@dataclass(frozen=True)
class Trade:
    """A committed ledger entry. Never mutated after creation."""

    id: int
    user_id: int
    symbol: str
    side: TradeSide
    price: Decimal
    quantity: Decimal
    executed_at: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def signed_quantity(self) -> Decimal:
        """Return the quantity with the sign of its side: BUY adds, SELL removes."""

        return self.quantity if self.side is TradeSide.BUY else -self.quantity


@dataclass(frozen=True)
class PortfolioItem:
    symbol: str
    quantity: Decimal
    value: Decimal = Decimal("0")


@dataclass(frozen=True)
class UserAccount:
    id: int
    email: str
    password_hash: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Identity:
    """Caller identity established by the access gate."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class TokenClaims:
    subject: int
    issued_at: datetime
    expires_at: datetime
    role: Optional[Role] = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
