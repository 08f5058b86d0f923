"""RunningPortfolio — incremental alternative to recomputing from the ledger."""

from __future__ import annotations

import threading
from decimal import Decimal, localcontext
from typing import Mapping

from token_sandbox.models.order import Order
from token_sandbox.models.portfolio import PortfolioSnapshot
from token_sandbox.portfolio.valuator import EXACT_CONTEXT, INITIAL_BALANCE, mark_positions


class RunningPortfolio:
    """Keeps balance, positions and cost basis up to date order by order.

    Produces the same snapshot as :func:`valuate` over the same orders;
    tests hold the two to that.
    """

    def __init__(self, initial_balance: Decimal = INITIAL_BALANCE) -> None:
        self.initial_balance = Decimal(initial_balance)
        self._lock = threading.Lock()
        self._balance = self.initial_balance
        self._positions: dict[str, Decimal] = {}
        self._cost_basis: dict[str, Decimal] = {}
        self._count = 0

    def reset(self) -> None:
        with self._lock:
            self._balance = self.initial_balance
            self._positions = {}
            self._cost_basis = {}
            self._count = 0

    def apply(self, order: Order) -> None:
        """Fold one order into the running totals."""
        sign = 1 if order.type == "buy" else -1
        with self._lock, localcontext(EXACT_CONTEXT):
            notional = order.amount * order.price
            self._balance -= sign * notional
            self._positions[order.symbol] = (
                self._positions.get(order.symbol, Decimal("0")) + sign * order.amount
            )
            self._cost_basis[order.symbol] = (
                self._cost_basis.get(order.symbol, Decimal("0")) + sign * notional
            )
            self._count += 1

    @property
    def order_count(self) -> int:
        return self._count

    def snapshot(
        self,
        latest_price: Decimal,
        mark_prices: Mapping[str, Decimal] | None = None,
    ) -> PortfolioSnapshot:
        with self._lock:
            return mark_positions(
                initial_balance=self.initial_balance,
                balance=self._balance,
                positions=self._positions,
                cost_basis=self._cost_basis,
                latest_price=Decimal(latest_price),
                mark_prices=mark_prices,
                order_count=self._count,
            )
