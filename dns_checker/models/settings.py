"""Configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    """Configuration settings for dns_checker."""

    TELEGRAM_TOKEN: str
    CHAT_ID: str
    DNS_HOSTNAME: str
    API_KEY: str
    API_SECRET: str
    URL: str
    INTERFACE: str
    LOCKFILE: Path
    POLL_INTERVAL_S: float
    ROUTER_VERIFY_TLS: bool
    HTTP_TIMEOUT_S: float

    def __repr__(self) -> str:
        return (
            f"Settings(DNS_HOSTNAME={self.DNS_HOSTNAME!r}, URL={self.URL!r}, "
            f"INTERFACE={self.INTERFACE!r}, CHAT_ID={self.CHAT_ID!r}, "
            f"LOCKFILE={str(self.LOCKFILE)!r}, POLL_INTERVAL_S={self.POLL_INTERVAL_S})"
        )
