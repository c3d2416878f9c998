"""
Domain errors for the trade ledger.

Everything the services raise on purpose is defined here. The HTTP layer
maps each family to a status code; nothing in this module imports a web
framework.
"""

from __future__ import annotations


class TradeLogError(Exception):
    """Base error for all TradeLog domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ConfigurationError(TradeLogError):
    """Raised when the process is started with unusable configuration."""


# Validation


class ValidationError(TradeLogError):
    """Bad input shape or range."""


class InvalidQuantityError(ValidationError):
    def __init__(self, message: str = "quantity must be positive") -> None:
        super().__init__(message)


class InvalidPriceError(ValidationError):
    def __init__(self, message: str = "price must be positive") -> None:
        super().__init__(message)


class InvalidTradeSideError(ValidationError):
    def __init__(self, side: object) -> None:
        super().__init__(f"trade type must be BUY or SELL, got {side!r}")
        self.side = side


class InvalidSymbolError(ValidationError):
    def __init__(self) -> None:
        super().__init__("symbol must not be empty")


class InvalidPasswordError(ValidationError):
    def __init__(self, min_length: int) -> None:
        super().__init__(f"password must be at least {min_length} characters")
        self.min_length = min_length


# Business rules


class BusinessRuleViolation(TradeLogError):
    """Well-formed request that breaks a ledger or account rule."""


class InsufficientPositionError(BusinessRuleViolation):
    """Raised when a SELL exceeds the quantity currently held."""

    def __init__(self, symbol: str, held: object, requested: object) -> None:
        super().__init__("insufficient funds: you cannot sell more than you own")
        self.symbol = symbol
        self.held = held
        self.requested = requested


class DuplicateUserError(BusinessRuleViolation):
    def __init__(self, email: str) -> None:
        super().__init__("user already exists")
        self.email = email


# Authentication / authorization


class AuthenticationError(TradeLogError):
    """Caller identity could not be established."""


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidTokenError(AuthenticationError):
    def __init__(self, reason: str = "Invalid or expired token") -> None:
        super().__init__(reason)


class AuthorizationError(TradeLogError):
    """Caller is known but not allowed to do this."""


class AdminRequiredError(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("Admins only")


class InvalidAdminSecretError(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("invalid admin secret")


# Lookup


class NotFoundError(TradeLogError):
    """Requested resource does not exist."""


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


# Storage


class StoreError(TradeLogError):
    """Underlying persistence failure."""


class StoreTimeoutError(StoreError):
    """A store call ran past its deadline and was cancelled. Safe to retry."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} timed out after {timeout:g}s")
        self.operation = operation
        self.timeout = timeout


__all__ = [
    "AdminRequiredError",
    "AuthenticationError",
    "AuthorizationError",
    "BusinessRuleViolation",
    "ConfigurationError",
    "DuplicateUserError",
    "InsufficientPositionError",
    "InvalidAdminSecretError",
    "InvalidCredentialsError",
    "InvalidPasswordError",
    "InvalidPriceError",
    "InvalidQuantityError",
    "InvalidSymbolError",
    "InvalidTokenError",
    "InvalidTradeSideError",
    "NotFoundError",
    "StoreError",
    "StoreTimeoutError",
    "TradeLogError",
    "UserNotFoundError",
    "ValidationError",
]
