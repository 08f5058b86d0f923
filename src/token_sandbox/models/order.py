"""Order models — the draft a caller submits and the ledger record it becomes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OrderSide = Literal["buy", "sell"]


class OrderDraft(BaseModel):
    """Caller-supplied order fields, validated before the ledger accepts them."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    type: OrderSide
    amount: Decimal = Field(gt=0, allow_inf_nan=False)
    price: Decimal = Field(gt=0, allow_inf_nan=False)
    symbol: str = Field(min_length=1)


class Order(OrderDraft):
    """An order as recorded by the ledger. Never edited once appended."""

    id: int = Field(ge=1)
    timestamp: datetime

    @property
    def notional(self) -> Decimal:
        """Cash moved by this order: amount × price."""
        return self.amount * self.price

    @property
    def signed_amount(self) -> Decimal:
        """Quantity with the sign it contributes to a position."""
        return self.amount if self.type == "buy" else -self.amount
