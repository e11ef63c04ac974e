"""Persisted alert state dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AlertState:
    active: bool = False
    raised_at: datetime | None = None

    @classmethod
    def raised(cls, raised_at: datetime) -> "AlertState":
        return cls(active=True, raised_at=raised_at)

    def age_s(self, now: datetime) -> float | None:
        if not self.active or self.raised_at is None:
            return None
        return (now - self.raised_at).total_seconds()
