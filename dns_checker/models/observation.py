"""Per-cycle observation and decision dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .alert_state import AlertState


@dataclass(frozen=True)
class Observation:
    """Addresses seen in one cycle. None means the lookup failed."""

    router_ip: str | None
    dns_ip: str | None

    @property
    def matches(self) -> bool:
        return self.router_ip is not None and self.router_ip == self.dns_ip


class Action(str, Enum):
    ROUTER_UNAVAILABLE = "router_unavailable"
    DNS_UNAVAILABLE = "dns_unavailable"
    STEADY = "steady"
    RAISE = "raise"
    CLEAR = "clear"
    SUPPRESS = "suppress"


@dataclass(frozen=True)
class Decision:
    action: Action
    state: AlertState
    notified: bool = False
    delivered: bool = False
