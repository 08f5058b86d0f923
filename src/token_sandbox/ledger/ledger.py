"""OrderLedger — validates drafts, assigns ids and timestamps, keeps history."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping

import pydantic
import structlog

from token_sandbox.errors import ValidationError
from token_sandbox.models.order import Order, OrderDraft

log = structlog.get_logger("order_ledger")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_draft(draft: OrderDraft | Mapping[str, Any] | Any) -> OrderDraft:
    """Coerce *draft* into a validated OrderDraft or raise ValidationError.

    Anything that is not a mapping (a list, a string, None) is malformed too.
    """
    if isinstance(draft, OrderDraft):
        return draft
    try:
        return OrderDraft.model_validate(draft)
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid order data", errors=exc.errors()) from exc


class OrderLedger:
    """Append-only store of orders.

    The ledger is a pure fact store: it checks the *shape* of an order
    (positive amount and price, non-empty symbol, buy/sell) but never the
    portfolio, so an order that overdraws the balance is accepted.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._orders: list[Order] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def append(self, draft: OrderDraft | Mapping[str, Any]) -> Order:
        """Validate *draft* and record it. Returns the stored Order.

        Raises:
            ValidationError: the draft is malformed; nothing is recorded and
                no id is consumed.
        """
        parsed = parse_draft(draft)
        with self._lock:
            order = Order(
                **parsed.model_dump(),
                id=self._next_id,
                timestamp=self._clock(),
            )
            self._orders.append(order)
            self._next_id += 1
        log.info(
            "order_appended",
            order_id=order.id,
            side=order.type,
            symbol=order.symbol,
            amount=str(order.amount),
            price=str(order.price),
        )
        return order

    def all(self) -> list[Order]:
        """Every order in insertion order, oldest first. Returns a copy."""
        with self._lock:
            return list(self._orders)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self.all())
