"""Shared test fixtures."""

import random
from datetime import datetime, timezone

import pytest

from token_sandbox.ledger import OrderLedger
from token_sandbox.prices import PriceSeriesGenerator
from token_sandbox.sandbox import Sandbox
from token_sandbox.waitlist import WaitlistRegistry

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock():
    """Frozen clock shared by generator, ledger and waitlist."""
    return fixed_clock


@pytest.fixture
def rng():
    """Seeded random source so generated series are reproducible."""
    return random.Random(1234)


@pytest.fixture
def generator(rng):
    return PriceSeriesGenerator(rng=rng, clock=fixed_clock)


@pytest.fixture
def ledger():
    return OrderLedger(clock=fixed_clock)


@pytest.fixture
def sandbox(generator, ledger):
    """Sandbox with a seeded feed and a frozen clock."""
    return Sandbox(
        generator=generator,
        ledger=ledger,
        waitlist=WaitlistRegistry(clock=fixed_clock),
    )
