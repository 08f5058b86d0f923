"""Timeframe sampling policies for the synthetic feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal


@dataclass(frozen=True)
class SamplingPolicy:
    """How many points to produce, how far apart, and how noisy."""

    points: int
    spacing: timedelta
    volatility: Decimal  # max absolute deviation from the base price


DEFAULT_TIMEFRAME = "24H"

TIMEFRAME_POLICIES: dict[str, SamplingPolicy] = {
    "1H": SamplingPolicy(points=60, spacing=timedelta(minutes=1), volatility=Decimal("1")),
    "24H": SamplingPolicy(points=24, spacing=timedelta(hours=1), volatility=Decimal("5")),
    "7D": SamplingPolicy(points=168, spacing=timedelta(hours=1), volatility=Decimal("5")),
}


def resolve_policy(timeframe: str | None) -> tuple[str, SamplingPolicy]:
    """Return ``(name, policy)`` for *timeframe*, falling back to 24H.

    Matching is exact: "1h" is not "1H".
    """
    if timeframe in TIMEFRAME_POLICIES:
        return timeframe, TIMEFRAME_POLICIES[timeframe]
    return DEFAULT_TIMEFRAME, TIMEFRAME_POLICIES[DEFAULT_TIMEFRAME]
