"""Waitlist of subscriber emails."""

from token_sandbox.waitlist.registry import WaitlistRegistry

__all__ = ["WaitlistRegistry"]
