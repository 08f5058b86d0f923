"""Pydantic domain models."""

from token_sandbox.models.order import Order, OrderDraft, OrderSide
from token_sandbox.models.portfolio import PortfolioSnapshot, PortfolioSummary
from token_sandbox.models.price import PricePoint
from token_sandbox.models.waitlist import WaitlistEntry

__all__ = [
    "Order",
    "OrderDraft",
    "OrderSide",
    "PortfolioSnapshot",
    "PortfolioSummary",
    "PricePoint",
    "WaitlistEntry",
]
