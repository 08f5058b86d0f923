"""Sandbox — the core's boundary operations, wired from config.

One instance is built at process start and handed to the HTTP layer;
there is no module-level store.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Mapping

import structlog

from token_sandbox.config.schema import AppConfig
from token_sandbox.ledger import OrderLedger
from token_sandbox.models import (
    Order,
    OrderDraft,
    PortfolioSnapshot,
    PortfolioSummary,
    PricePoint,
)
from token_sandbox.portfolio import INITIAL_BALANCE, RunningPortfolio, valuate
from token_sandbox.prices import DEFAULT_TIMEFRAME, PriceSeriesGenerator
from token_sandbox.waitlist import WaitlistRegistry

log = structlog.get_logger("sandbox")


class Sandbox:
    """Price feed, order ledger, valuation and waitlist behind one handle."""

    def __init__(
        self,
        generator: PriceSeriesGenerator | None = None,
        ledger: OrderLedger | None = None,
        waitlist: WaitlistRegistry | None = None,
        initial_balance: Decimal = INITIAL_BALANCE,
        default_timeframe: str = DEFAULT_TIMEFRAME,
        incremental: bool = False,
    ) -> None:
        self.generator = generator if generator is not None else PriceSeriesGenerator()
        self.ledger = ledger if ledger is not None else OrderLedger()
        self.waitlist = waitlist if waitlist is not None else WaitlistRegistry()
        self.initial_balance = Decimal(initial_balance)
        self.default_timeframe = default_timeframe
        self._running = RunningPortfolio(self.initial_balance) if incremental else None
        if self._running is not None:
            for order in self.ledger.all():
                self._running.apply(order)

        # Start with a series so latest() has something to return
        self.generator.generate(default_timeframe)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> "Sandbox":
        """Build a sandbox from the ``sandbox`` config section."""
        settings = config.sandbox
        rng = random.Random(settings.seed) if settings.seed is not None else None
        if clock is None:
            clock = lambda: datetime.now(timezone.utc)  # noqa: E731
        sandbox = cls(
            generator=PriceSeriesGenerator(
                base_price=settings.base_price, rng=rng, clock=clock,
            ),
            ledger=OrderLedger(clock=clock),
            waitlist=WaitlistRegistry(clock=clock),
            initial_balance=settings.initial_balance,
            default_timeframe=settings.default_timeframe,
            incremental=settings.valuation == "incremental",
        )
        log.info(
            "sandbox_ready",
            initial_balance=str(settings.initial_balance),
            base_price=str(settings.base_price),
            seeded=settings.seed is not None,
            valuation=settings.valuation,
        )
        return sandbox

    # ── Prices ────────────────────────────────────────────────

    def get_latest_price(self) -> PricePoint:
        return self.generator.latest()

    def get_price_history(self, timeframe: str | None = None) -> list[PricePoint]:
        """Regenerate the series for *timeframe*; latest() follows it.

        ``None`` means the configured default; any other unknown string,
        including "", falls back to 24H.
        """
        if timeframe is None:
            timeframe = self.default_timeframe
        return self.generator.generate(timeframe)

    # ── Orders ────────────────────────────────────────────────

    def create_order(self, draft: OrderDraft | Mapping[str, Any]) -> Order:
        """Append an order. Raises ValidationError for a malformed draft."""
        order = self.ledger.append(draft)
        if self._running is not None:
            self._running.apply(order)
        return order

    def get_orders(self) -> list[Order]:
        return self.ledger.all()

    # ── Portfolio ─────────────────────────────────────────────

    def get_snapshot(
        self,
        mark_prices: Mapping[str, Decimal] | None = None,
    ) -> PortfolioSnapshot:
        """Full valuation marked at the latest quote (or per-symbol overrides)."""
        latest = self.generator.latest().price
        if self._running is not None:
            return self._running.snapshot(latest, mark_prices=mark_prices)
        return valuate(
            self.ledger.all(),
            latest,
            initial_balance=self.initial_balance,
            mark_prices=mark_prices,
        )

    def get_portfolio(self) -> PortfolioSummary:
        return self.get_snapshot().summary()

    # ── Waitlist ──────────────────────────────────────────────

    def add_to_waitlist(self, email: str) -> bool:
        return self.waitlist.add(email)
