"""Price feed models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """One sample of the synthetic price series."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    price: Decimal = Field(gt=0)
    timestamp: datetime
