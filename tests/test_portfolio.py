"""Tests for portfolio valuation — recompute, incremental cache, allocation."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, localcontext

import pytest
from hypothesis import given, settings, strategies as st

from token_sandbox.models import Order
from token_sandbox.portfolio import (
    EXACT_CONTEXT,
    INITIAL_BALANCE,
    RunningPortfolio,
    allocation,
    valuate,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _order(order_id, side, amount, price, symbol="NXP"):
    return Order(
        id=order_id,
        timestamp=NOW,
        type=side,
        amount=Decimal(str(amount)),
        price=Decimal(str(price)),
        symbol=symbol,
    )


def _positive_decimals(low: str, high: str):
    """Cent-style values, full-precision decimals, and JSON-float-shaped values."""
    lo, hi = Decimal(low), Decimal(high)
    return st.one_of(
        st.decimals(min_value=lo, max_value=hi, places=2),
        st.decimals(min_value=lo, max_value=hi, allow_nan=False, allow_infinity=False),
        st.floats(min_value=float(lo), max_value=float(hi), allow_nan=False, allow_infinity=False)
        .map(lambda f: Decimal(repr(f)))
        .filter(lambda d: d > 0),
    )


amounts = _positive_decimals("0.000001", "1000000")
mark_prices = _positive_decimals("0.000001", "1000000")


@st.composite
def order_lists(draw, max_size=25):
    count = draw(st.integers(min_value=0, max_value=max_size))
    orders = []
    for i in range(count):
        orders.append(Order(
            id=i + 1,
            timestamp=NOW,
            type=draw(st.sampled_from(["buy", "sell"])),
            amount=draw(amounts),
            price=draw(mark_prices),
            symbol=draw(st.sampled_from(["NXP", "QTE", "STL", "LAI"])),
        ))
    return orders


class TestValuate:
    def test_empty_history(self):
        snap = valuate([], Decimal("110"))
        assert snap.balance == INITIAL_BALANCE
        assert snap.value == INITIAL_BALANCE
        assert snap.positions == {}
        assert snap.cost_basis == {}
        assert snap.tokens_value == Decimal("0")
        assert snap.order_count == 0

    def test_buy_then_partial_sell_scenario(self):
        orders = [_order(1, "buy", 10, 100), _order(2, "sell", 4, 120)]
        snap = valuate(orders, Decimal("110"))
        assert snap.positions == {"NXP": Decimal("6")}
        assert snap.balance == Decimal("480")
        assert snap.value == Decimal("1140")
        assert snap.cost_basis == {"NXP": Decimal("520")}
        assert snap.tokens_value == Decimal("660")
        assert snap.unrealized_pnl == {"NXP": Decimal("140")}
        assert snap.order_count == 2

    def test_all_symbols_marked_at_single_latest_price(self):
        orders = [
            _order(1, "buy", 1, 100, "NXP"),
            _order(2, "buy", 2, 50, "QTE"),
        ]
        snap = valuate(orders, Decimal("10"))
        assert snap.marks == {"NXP": Decimal("10"), "QTE": Decimal("10")}
        assert snap.tokens_value == Decimal("30")
        assert snap.value == Decimal("800") + Decimal("30")

    def test_per_symbol_marks_override_latest(self):
        orders = [
            _order(1, "buy", 1, 100, "NXP"),
            _order(2, "buy", 2, 50, "QTE"),
        ]
        snap = valuate(orders, Decimal("10"), mark_prices={"QTE": Decimal("75")})
        assert snap.marks == {"NXP": Decimal("10"), "QTE": Decimal("75")}
        assert snap.tokens_value == Decimal("160")

    def test_oversold_position_goes_negative(self):
        snap = valuate([_order(1, "sell", 3, 100)], Decimal("90"))
        assert snap.positions == {"NXP": Decimal("-3")}
        assert snap.balance == Decimal("1300")
        assert snap.value == Decimal("1300") - Decimal("270")
        assert snap.cost_basis == {"NXP": Decimal("-300")}

    def test_balance_can_go_negative(self):
        snap = valuate([_order(1, "buy", 20, 100)], Decimal("100"))
        assert snap.balance == Decimal("-1000")
        assert snap.value == Decimal("1000")

    def test_custom_initial_balance(self):
        snap = valuate([], Decimal("100"), initial_balance=Decimal("5000"))
        assert snap.value == Decimal("5000")
        assert snap.initial_balance == Decimal("5000")

    def test_closed_position_stays_with_zero_quantity(self):
        orders = [_order(1, "buy", 5, 100), _order(2, "sell", 5, 100)]
        snap = valuate(orders, Decimal("250"))
        assert snap.positions == {"NXP": Decimal("0")}
        assert snap.value == INITIAL_BALANCE

    def test_deterministic(self):
        orders = [_order(1, "buy", 3, 99.5), _order(2, "sell", 1, 101.25, "QTE")]
        assert valuate(orders, Decimal("100")) == valuate(orders, Decimal("100"))

    def test_float_precision_inputs_are_order_independent(self):
        # 15-17 significant digits each, as JSON floats arrive over the API;
        # the products need more digits than the default 28-digit context
        orders = [
            _order(1, "buy", Decimal("123456.789012345"), Decimal("987.654321098765")),
            _order(2, "sell", Decimal("0.333333333333333"), Decimal("99999.9999999999")),
            _order(3, "buy", Decimal("77777.7777777777"), Decimal("1234.56789012345"), "QTE"),
            _order(4, "sell", Decimal("98765.4321098765"), Decimal("0.123456789012345"), "QTE"),
        ]
        latest = Decimal("101.234567890123")
        forward = valuate(orders, latest)
        assert valuate(list(reversed(orders)), latest) == forward
        assert valuate([orders[2], orders[0], orders[3], orders[1]], latest) == forward
        with localcontext(EXACT_CONTEXT):
            expected = (
                INITIAL_BALANCE
                - orders[0].amount * orders[0].price
                + orders[1].amount * orders[1].price
                - orders[2].amount * orders[2].price
                + orders[3].amount * orders[3].price
            )
        assert forward.balance == expected

    def test_incremental_cache_exact_at_float_precision(self):
        orders = [
            _order(1, "buy", Decimal("123456.789012345"), Decimal("987.654321098765")),
            _order(2, "sell", Decimal("0.333333333333333"), Decimal("99999.9999999999")),
        ]
        running = RunningPortfolio()
        for order in reversed(orders):
            running.apply(order)
        latest = Decimal("101.234567890123")
        assert running.snapshot(latest) == valuate(orders, latest)


class TestValuationProperties:
    @given(orders=order_lists(), latest=mark_prices, data=st.data())
    @settings(max_examples=100)
    def test_order_independent(self, orders, latest, data):
        permuted = data.draw(st.permutations(orders))
        assert valuate(permuted, latest) == valuate(orders, latest)

    @given(
        orders=order_lists(),
        amount=amounts,
        buy_price=mark_prices,
        sell_price=mark_prices,
        latest=mark_prices,
    )
    @settings(max_examples=100)
    def test_round_trip_restores_position(self, orders, amount, buy_price, sell_price, latest):
        before = valuate(orders, latest)
        n = len(orders)
        after = valuate(
            orders + [_order(n + 1, "buy", amount, buy_price), _order(n + 2, "sell", amount, sell_price)],
            latest,
        )
        assert after.positions.get("NXP", Decimal("0")) == before.positions.get("NXP", Decimal("0"))
        with localcontext(EXACT_CONTEXT):
            assert after.balance - before.balance == amount * (sell_price - buy_price)

    @given(orders=order_lists(), latest=mark_prices)
    @settings(max_examples=100)
    def test_value_is_balance_plus_marked_positions(self, orders, latest):
        snap = valuate(orders, latest)
        with localcontext(EXACT_CONTEXT):
            expected = snap.balance + sum(
                (q * latest for q in snap.positions.values()), Decimal("0")
            )
        assert snap.value == expected

    @given(orders=order_lists(), latest=mark_prices)
    @settings(max_examples=100)
    def test_cash_conservation(self, orders, latest):
        # Every unit of cash that left the balance sits in some cost basis
        snap = valuate(orders, latest)
        with localcontext(EXACT_CONTEXT):
            assert snap.balance + sum(snap.cost_basis.values(), Decimal("0")) == INITIAL_BALANCE


class TestRunningPortfolio:
    def test_empty(self):
        running = RunningPortfolio()
        assert running.snapshot(Decimal("100")) == valuate([], Decimal("100"))
        assert running.order_count == 0

    def test_reset(self):
        running = RunningPortfolio(Decimal("2000"))
        running.apply(_order(1, "buy", 1, 100))
        running.reset()
        assert running.snapshot(Decimal("100")).balance == Decimal("2000")
        assert running.order_count == 0

    @given(orders=order_lists(), latest=mark_prices, marks=st.dictionaries(
        keys=st.sampled_from(["NXP", "QTE"]), values=mark_prices, max_size=2,
    ))
    @settings(max_examples=100)
    def test_matches_full_recompute(self, orders, latest, marks):
        running = RunningPortfolio()
        for order in orders:
            running.apply(order)
        assert running.snapshot(latest, mark_prices=marks) == valuate(
            orders, latest, mark_prices=marks,
        )


class TestAllocation:
    def test_shares_of_positive_holdings(self):
        orders = [
            _order(1, "buy", 3, 10, "NXP"),
            _order(2, "buy", 1, 10, "QTE"),
            _order(3, "sell", 2, 10, "STL"),
        ]
        shares = allocation(valuate(orders, Decimal("10")))
        assert shares == {"NXP": Decimal("0.75"), "QTE": Decimal("0.25")}

    def test_no_holdings_means_no_shares(self):
        assert allocation(valuate([], Decimal("100"))) == {}

    def test_flat_and_short_only(self):
        orders = [_order(1, "buy", 1, 10), _order(2, "sell", 1, 10), _order(3, "sell", 1, 10, "QTE")]
        assert allocation(valuate(orders, Decimal("10"))) == {}

    @given(orders=order_lists(), latest=mark_prices)
    @settings(max_examples=50)
    def test_shares_sum_to_one(self, orders, latest):
        shares = allocation(valuate(orders, latest))
        if shares:
            assert abs(sum(shares.values()) - 1) < Decimal("1e-20")
            assert all(0 < s <= 1 for s in shares.values())
