"""PriceSeriesGenerator — synthetic quotes scattered around a fixed base price."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

import structlog

from token_sandbox.models.price import PricePoint
from token_sandbox.prices.timeframes import DEFAULT_TIMEFRAME, TIMEFRAME_POLICIES, resolve_policy

log = structlog.get_logger("price_generator")

# Quantum for generated prices; keeps Decimal output readable
_PRICE_PLACES = Decimal("0.00000001")
_MAX_VOLATILITY = max(p.volatility for p in TIMEFRAME_POLICIES.values())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceSeriesGenerator:
    """Produces a synthetic price series standing in for a market feed.

    Not a pure function of time: every :meth:`generate` call draws fresh
    randomness and *replaces* the stored series, so two calls with the same
    timeframe return different numbers and :meth:`latest` follows whichever
    series was generated last. Callers that need a stable series must keep
    the returned list. Inject a seeded ``random.Random`` for reproducibility.
    """

    def __init__(
        self,
        base_price: Decimal = Decimal("100"),
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        base_price = Decimal(base_price)
        # Every generated price must stay positive at the widest band
        if base_price <= _MAX_VOLATILITY:
            raise ValueError(f"base_price must exceed {_MAX_VOLATILITY}")
        self.base_price = base_price
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._series: list[PricePoint] = []
        self._timeframe: str | None = None

    @property
    def series(self) -> tuple[PricePoint, ...]:
        """The most recently generated batch (empty before the first call)."""
        return tuple(self._series)

    @property
    def timeframe(self) -> str | None:
        """Resolved timeframe of the current batch."""
        return self._timeframe

    def generate(self, timeframe: str = DEFAULT_TIMEFRAME) -> list[PricePoint]:
        """Generate a new series for *timeframe* and store it as current.

        Unknown timeframes use the 24H policy.
        """
        resolved, policy = resolve_policy(timeframe)
        if resolved != timeframe:
            log.debug("timeframe_fallback", requested=timeframe, used=resolved)

        now = self._clock()
        points: list[PricePoint] = []
        for i in range(policy.points):
            delta = (Decimal(self._rng.random()) - Decimal("0.5")) * 2 * policy.volatility
            price = (self.base_price + delta).quantize(_PRICE_PLACES)
            points.append(PricePoint(
                id=i + 1,
                price=price,
                timestamp=now - (policy.points - 1 - i) * policy.spacing,
            ))

        self._series = points
        self._timeframe = resolved
        log.debug("price_series_generated", timeframe=resolved, points=len(points))
        return list(points)

    def latest(self) -> PricePoint:
        """Last point of the current series, generating a 24H series if none exists."""
        if not self._series:
            self.generate(DEFAULT_TIMEFRAME)
        return self._series[-1]
