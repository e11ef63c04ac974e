"""Telegram notifications for address mismatch alerts."""

from __future__ import annotations

import logging
from typing import Any

import requests

__all__ = [
    "TelegramNotifier",
    "parse_ok",
    "mismatch_message",
    "recovered_message",
    "DEFAULT_API_BASE",
]

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"
_TIMEOUT_S = 10.0


def mismatch_message(router_ip: str, dns_ip: str, hostname: str | None = None) -> str:
    lines = [
        "IP address mismatch between router and DNS server!",
        f"Router IP: {router_ip}",
        f"DNS IP: {dns_ip}",
    ]
    if hostname:
        lines.append(f"Hostname: {hostname}")
    return "\n".join(lines)


def recovered_message(ip: str, hostname: str | None = None) -> str:
    lines = ["IP addresses are the same again", f"IP: {ip}"]
    if hostname:
        lines.append(f"Hostname: {hostname}")
    return "\n".join(lines)


def parse_ok(body: Any) -> bool:
    """Return True only for a JSON object carrying ``"ok": true``."""
    if not isinstance(body, dict):
        logger.warning("Unexpected Telegram response body: %r", body)
        return False
    ok = body.get("ok")
    if not isinstance(ok, bool):
        logger.warning('Failed to get "ok" from Telegram response')
        return False
    if not ok:
        logger.warning(
            "Telegram rejected message: %s %s",
            body.get("error_code", ""),
            body.get("description", ""),
        )
    return ok


class TelegramNotifier:
    """Send one-line messages to a fixed chat via the Bot API.

    Each ``send`` is a single POST with a bounded timeout. Retrying is left to
    the caller, which simply tries again on its next cycle.
    """

    def __init__(
        self,
        token: str,
        chat_id: str,
        timeout_s: float = _TIMEOUT_S,
        api_base: str = DEFAULT_API_BASE,
    ) -> None:
        self._token = token
        self.chat_id = chat_id
        self.timeout_s = timeout_s
        self.api_base = api_base.rstrip("/")

    @property
    def url(self) -> str:
        return f"{self.api_base}/bot{self._token}/sendMessage"

    def _redact(self, text: str) -> str:
        return text.replace(self._token, "<token>") if self._token else text

    def send(self, text: str) -> bool:
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "disable_notification": False,
        }
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout_s)
        except requests.RequestException as exc:
            logger.warning("Failed to send Telegram message: %s", self._redact(str(exc)))
            return False
        try:
            body = resp.json()
        except ValueError:
            logger.warning(
                "Failed to parse Telegram response (HTTP %s)", resp.status_code
            )
            return False
        return parse_ok(body)
