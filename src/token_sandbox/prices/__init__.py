"""Synthetic price feed."""

from token_sandbox.prices.generator import PriceSeriesGenerator
from token_sandbox.prices.timeframes import (
    DEFAULT_TIMEFRAME,
    TIMEFRAME_POLICIES,
    SamplingPolicy,
    resolve_policy,
)

__all__ = [
    "DEFAULT_TIMEFRAME",
    "TIMEFRAME_POLICIES",
    "PriceSeriesGenerator",
    "SamplingPolicy",
    "resolve_policy",
]
