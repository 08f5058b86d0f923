"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class SandboxConfig(BaseModel):
    initial_balance: Decimal = Decimal("1000")
    base_price: Decimal = Field(default=Decimal("100"), gt=0)
    default_timeframe: str = "24H"
    # Seed for the synthetic price feed; None draws from OS entropy
    seed: int | None = None
    valuation: Literal["recompute", "incremental"] = "recompute"


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class AppConfig(BaseModel):
    sandbox: SandboxConfig = Field(default_factory=SandboxConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
