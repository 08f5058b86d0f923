"""Waitlist model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class WaitlistEntry(BaseModel):
    email: str
    joined_at: datetime
