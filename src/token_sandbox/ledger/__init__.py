"""Append-only order ledger."""

from token_sandbox.ledger.ledger import OrderLedger, parse_draft

__all__ = ["OrderLedger", "parse_draft"]
