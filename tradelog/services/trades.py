"""Trade creation, listing and portfolio queries."""

from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncIterator, Callable

from tradelog.core.errors import (
    InsufficientPositionError,
    InvalidPriceError,
    InvalidQuantityError,
    InvalidSymbolError,
    InvalidTradeSideError,
)
from tradelog.domain import AMOUNT_PRECISION, AMOUNT_SCALE, NewTrade, PortfolioItem, Trade, TradeSide
from tradelog.ports import LedgerStore
from tradelog.services.deadline import with_deadline
from tradelog.services.positions import aggregate_portfolio, calculate_position

logger = logging.getLogger(__name__)

_PRECISION_MESSAGE = (
    f"{{field}} must have at most {AMOUNT_SCALE} decimal places"
    f" and {AMOUNT_PRECISION - AMOUNT_SCALE} integer digits"
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def fits_ledger_column(value: Decimal) -> bool:
    """True when ``value`` is stored in a NUMERIC(28, 10) column without rounding or overflow."""
    if not value.is_finite():
        return False
    if value.as_tuple().exponent < -AMOUNT_SCALE:
        return False
    return value.is_zero() or value.adjusted() < AMOUNT_PRECISION - AMOUNT_SCALE


def parse_side(value: TradeSide | str) -> TradeSide:
    if isinstance(value, TradeSide):
        return value
    try:
        return TradeSide(str(value).strip().upper())
    except ValueError as exc:
        raise InvalidTradeSideError(value) from exc


class TradeService:
    """Validates and records trades against the ledger.

    The oversell check reads the ledger and then appends to it. With
    ``serialize=True`` both steps run under a per-user lock, so two
    concurrent sells by the same user cannot both pass against the same
    position. The lock is per process; several workers sharing one database
    are not serialised against each other. ``serialize=False`` keeps the
    unguarded read-then-write behaviour.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        *,
        timeout: float | None = None,
        serialize: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ledger = ledger
        self._timeout = timeout
        self._serialize = serialize
        self._clock = clock
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    async def create_trade(
        self,
        user_id: int,
        symbol: str,
        side: TradeSide | str,
        price: Decimal,
        quantity: Decimal,
        notes: str | None = None,
    ) -> Trade:
        """Validate a proposed trade and append it to the ledger.

        Rules are checked in order and the first failure wins: positive
        quantity, positive price (both storable exactly in the ledger column),
        known side and non-empty symbol, then for sells a position at least
        as large as the requested quantity.

        Raises:
            ValidationError: quantity or price not positive or not storable exactly,
                unknown side, blank symbol.
            InsufficientPositionError: a SELL larger than the current position.
            StoreError: the ledger read or append failed.
        """

        if quantity.is_nan() or not quantity > 0:
            raise InvalidQuantityError()
        if not fits_ledger_column(quantity):
            raise InvalidQuantityError(_PRECISION_MESSAGE.format(field="quantity"))
        if price.is_nan() or not price > 0:
            raise InvalidPriceError()
        if not fits_ledger_column(price):
            raise InvalidPriceError(_PRECISION_MESSAGE.format(field="price"))
        trade_side = parse_side(side)
        symbol = (symbol or "").strip()
        if not symbol:
            raise InvalidSymbolError()

        async with self._user_guard(user_id):
            if trade_side is TradeSide.SELL:
                held = await self.get_position(user_id, symbol)
                if held < quantity:
                    logger.info(
                        "Rejected SELL for user %s: %s requested %s, held %s", user_id, symbol, quantity, held
                    )
                    raise InsufficientPositionError(symbol, held, quantity)

            draft = NewTrade(
                user_id=user_id,
                symbol=symbol,
                side=trade_side,
                price=price,
                quantity=quantity,
                executed_at=self._clock(),
                notes=notes,
            )
            trade = await with_deadline(self._ledger.append(draft), self._timeout, "append trade")

        logger.info("Recorded %s %s %s for user %s (trade %s)", trade.side.value, quantity, symbol, user_id, trade.id)
        return trade

    async def get_position(self, user_id: int, symbol: str) -> Decimal:
        trades = await self.list_user_trades(user_id)
        return calculate_position(trades, symbol)

    async def get_portfolio(self, user_id: int) -> list[PortfolioItem]:
        trades = await self.list_user_trades(user_id)
        return aggregate_portfolio(trades)

    async def list_user_trades(self, user_id: int) -> list[Trade]:
        return await with_deadline(self._ledger.list_for_user(user_id), self._timeout, "list user trades")

    async def list_all_trades(self) -> list[Trade]:
        return await with_deadline(self._ledger.list_all(), self._timeout, "list all trades")

    @asynccontextmanager
    async def _user_guard(self, user_id: int) -> AsyncIterator[None]:
        if not self._serialize:
            yield
            return
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        async with lock:
            yield


__all__ = ["TradeService", "fits_ledger_column", "parse_side"]
