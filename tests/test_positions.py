"""Position and portfolio folds over trade histories."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from decimal import Decimal

from tradelog import aggregate_portfolio, calculate_position
from tradelog.domain import PortfolioItem, Trade, TradeSide


def _trade(trade_id: int, symbol: str, side: TradeSide, quantity: str, price: str = "100") -> Trade:
    return Trade(
        id=trade_id,
        user_id=1,
        symbol=symbol,
        side=side,
        price=Decimal(price),
        quantity=Decimal(quantity),
        executed_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


def build_history():
    return [
        _trade(1, "ETH/USD", TradeSide.BUY, "5"),
        _trade(2, "BTC/USD", TradeSide.BUY, "0.75"),
        _trade(3, "ETH/USD", TradeSide.BUY, "3"),
        _trade(4, "ETH/USD", TradeSide.SELL, "4"),
        _trade(5, "BTC/USD", TradeSide.SELL, "0.25"),
        _trade(6, "SOL/USD", TradeSide.BUY, "10"),
        _trade(7, "SOL/USD", TradeSide.SELL, "10"),
    ]


def test_position_is_signed_sum_for_symbol():
    history = build_history()
    assert calculate_position(history, "ETH/USD") == Decimal("4")
    assert calculate_position(history, "BTC/USD") == Decimal("0.50")
    assert calculate_position(history, "SOL/USD") == Decimal("0")


def test_position_of_unknown_symbol_is_zero():
    assert calculate_position(build_history(), "DOGE/USD") == Decimal("0")
    assert calculate_position([], "ETH/USD") == Decimal("0")


def test_position_independent_of_order():
    history = build_history()
    expected = calculate_position(history, "ETH/USD")
    for ordering in itertools.permutations(history):
        assert calculate_position(ordering, "ETH/USD") == expected


def test_position_uses_exact_decimal_arithmetic():
    history = [_trade(i, "X", TradeSide.BUY, "0.1") for i in range(10)]
    history.append(_trade(11, "X", TradeSide.SELL, "1"))
    assert calculate_position(history, "X") == Decimal("0")


def test_position_can_go_negative_for_legacy_data():
    history = [_trade(1, "X", TradeSide.SELL, "2")]
    assert calculate_position(history, "X") == Decimal("-2")


def test_portfolio_keeps_only_long_positions_sorted_by_symbol():
    portfolio = aggregate_portfolio(build_history())
    assert portfolio == [
        PortfolioItem(symbol="BTC/USD", quantity=Decimal("0.50"), value=Decimal("0")),
        PortfolioItem(symbol="ETH/USD", quantity=Decimal("4"), value=Decimal("0")),
    ]


def test_portfolio_drops_negative_positions():
    history = [_trade(1, "X", TradeSide.SELL, "2"), _trade(2, "Y", TradeSide.BUY, "1")]
    assert [item.symbol for item in aggregate_portfolio(history)] == ["Y"]


def test_portfolio_matches_per_symbol_positions():
    history = build_history()
    for item in aggregate_portfolio(reversed(history)):
        assert item.quantity == calculate_position(history, item.symbol)


def test_symbols_are_case_sensitive():
    history = [_trade(1, "btc/usd", TradeSide.BUY, "1"), _trade(2, "BTC/USD", TradeSide.BUY, "2")]
    assert calculate_position(history, "BTC/USD") == Decimal("2")
    assert len(aggregate_portfolio(history)) == 2
