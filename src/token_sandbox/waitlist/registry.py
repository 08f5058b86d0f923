"""WaitlistRegistry — unique subscriber emails, in signup order."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable

import structlog

from token_sandbox.models.waitlist import WaitlistEntry

log = structlog.get_logger("waitlist")


class WaitlistRegistry:
    """In-memory set of emails. Shape validation is the caller's job."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: dict[str, WaitlistEntry] = {}
        self._lock = threading.Lock()

    def add(self, email: str) -> bool:
        """Register *email*. Returns False if it was already present."""
        with self._lock:
            if email in self._entries:
                log.info("waitlist_duplicate", email=email)
                return False
            self._entries[email] = WaitlistEntry(email=email, joined_at=self._clock())
        log.info("waitlist_joined", email=email, size=len(self._entries))
        return True

    def entries(self) -> list[WaitlistEntry]:
        with self._lock:
            return list(self._entries.values())

    def __contains__(self, email: object) -> bool:
        return email in self._entries

    def __len__(self) -> int:
        return len(self._entries)
