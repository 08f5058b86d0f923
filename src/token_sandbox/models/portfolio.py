"""Derived portfolio models. Built fresh on every valuation, never stored."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class PortfolioSnapshot(BaseModel):
    """Full valuation of an order history at a set of mark prices.

    ``positions`` and ``cost_basis`` are signed: sells subtract, so an
    oversold symbol shows a negative quantity.
    """

    initial_balance: Decimal
    balance: Decimal
    positions: dict[str, Decimal] = Field(default_factory=dict)
    cost_basis: dict[str, Decimal] = Field(default_factory=dict)
    marks: dict[str, Decimal] = Field(default_factory=dict)
    unrealized_pnl: dict[str, Decimal] = Field(default_factory=dict)
    tokens_value: Decimal = Decimal("0")
    value: Decimal
    order_count: int = 0

    def summary(self) -> "PortfolioSummary":
        return PortfolioSummary(balance=self.balance, value=self.value)


class PortfolioSummary(BaseModel):
    """The ``{balance, value}`` pair shown on the dashboard."""

    balance: Decimal
    value: Decimal
