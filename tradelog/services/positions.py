"""Position and portfolio folds over a user's trade history."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from tradelog.domain import PortfolioItem, Trade

ZERO = Decimal("0")


def calculate_position(trades: Iterable[Trade], symbol: str) -> Decimal:
    """Return the signed net quantity held for ``symbol``.

    BUY trades add their quantity and SELL trades subtract it. The result is
    a plain sum, so the order of ``trades`` does not matter.
    """

    position = ZERO
    for trade in trades:
        if trade.symbol == symbol:
            position += trade.signed_quantity()
    return position


def aggregate_portfolio(trades: Iterable[Trade]) -> list[PortfolioItem]:
    """Fold a full history into holdings, one item per symbol held long.

    Symbols whose net quantity is zero or negative are dropped. Items are
    sorted by symbol. ``value`` stays zero since no pricing source exists.
    """

    holdings: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for trade in trades:
        holdings[trade.symbol] += trade.signed_quantity()

    return [
        PortfolioItem(symbol=symbol, quantity=quantity, value=ZERO)
        for symbol, quantity in sorted(holdings.items())
        if quantity > ZERO
    ]


__all__ = ["aggregate_portfolio", "calculate_position"]
