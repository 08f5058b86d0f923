"""Errors raised by the sandbox core."""

from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """A malformed order draft.

    Always caller-recoverable: the request is rejected and the ledger is left
    untouched. ``errors`` holds the per-field problems reported by pydantic.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
