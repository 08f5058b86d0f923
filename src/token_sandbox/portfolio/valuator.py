"""Pure valuation functions — no state, no randomness, no I/O."""

from __future__ import annotations

from collections import defaultdict
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext
from typing import Iterable, Mapping

from token_sandbox.models.order import Order
from token_sandbox.models.portfolio import PortfolioSnapshot

INITIAL_BALANCE = Decimal("1000")

# Additions and products never round under this context, so sums are
# associative and the result cannot depend on the order of the history.
# Only +, - and * may run under it; division would not terminate.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_ZERO = Decimal("0")


def mark_positions(
    initial_balance: Decimal,
    balance: Decimal,
    positions: Mapping[str, Decimal],
    cost_basis: Mapping[str, Decimal],
    latest_price: Decimal,
    mark_prices: Mapping[str, Decimal] | None = None,
    order_count: int = 0,
) -> PortfolioSnapshot:
    """Value aggregated positions and build the snapshot.

    Each symbol is marked at ``mark_prices[symbol]`` when given, otherwise at
    the single global *latest_price*.
    """
    overrides = mark_prices or {}
    marks: dict[str, Decimal] = {}
    unrealized: dict[str, Decimal] = {}
    tokens_value = _ZERO
    with localcontext(EXACT_CONTEXT):
        for symbol, quantity in positions.items():
            mark = Decimal(overrides.get(symbol, latest_price))
            marks[symbol] = mark
            market_value = quantity * mark
            unrealized[symbol] = market_value - cost_basis.get(symbol, _ZERO)
            tokens_value += market_value
        value = balance + tokens_value

    return PortfolioSnapshot(
        initial_balance=initial_balance,
        balance=balance,
        positions=dict(positions),
        cost_basis=dict(cost_basis),
        marks=marks,
        unrealized_pnl=unrealized,
        tokens_value=tokens_value,
        value=value,
        order_count=order_count,
    )


def valuate(
    orders: Iterable[Order],
    latest_price: Decimal,
    *,
    initial_balance: Decimal = INITIAL_BALANCE,
    mark_prices: Mapping[str, Decimal] | None = None,
) -> PortfolioSnapshot:
    """Recompute the portfolio from the full order history.

    Buys move ``amount × price`` from cash into the position and its cost
    basis; sells move it back. Oversold (negative) positions are valued as
    they are. Arithmetic is exact, so the order of *orders* does not affect
    the result whatever the precision of the inputs.
    """
    balance = Decimal(initial_balance)
    positions: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    cost_basis: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    count = 0

    with localcontext(EXACT_CONTEXT):
        for order in orders:
            notional = order.amount * order.price
            if order.type == "buy":
                balance -= notional
                positions[order.symbol] += order.amount
                cost_basis[order.symbol] += notional
            else:
                balance += notional
                positions[order.symbol] -= order.amount
                cost_basis[order.symbol] -= notional
            count += 1

    return mark_positions(
        initial_balance=Decimal(initial_balance),
        balance=balance,
        positions=positions,
        cost_basis=cost_basis,
        latest_price=Decimal(latest_price),
        mark_prices=mark_prices,
        order_count=count,
    )


def allocation(snapshot: PortfolioSnapshot) -> dict[str, Decimal]:
    """Share (0–1) of each holding with a positive marked value.

    Short and flat holdings are left out. Returns an empty dict when nothing
    is held long. Shares are rounded to the ambient context's precision.
    """
    with localcontext(EXACT_CONTEXT):
        values = {
            symbol: quantity * snapshot.marks[symbol]
            for symbol, quantity in snapshot.positions.items()
        }
        held = {symbol: v for symbol, v in values.items() if v > 0}
        total = sum(held.values(), _ZERO)
    if total == 0:
        return {}
    return {symbol: v / total for symbol, v in held.items()}
