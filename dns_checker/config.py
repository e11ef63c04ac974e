"""Central configuration for dns_checker.

Settings are read from the process environment exactly once, at startup, and
then handed to the components that need them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from .models.settings import Settings
from .utils import parse_bool

logger = logging.getLogger(__name__)

REQUIRED_VARS: tuple[str, ...] = (
    "TELEGRAM_TOKEN",
    "DNS_HOSTNAME",
    "API_KEY",
    "API_SECRET",
    "URL",
    "CHAT_ID",
    "INTERFACE",
)

DEFAULT_LOCKFILE = "/tmp/telegram.lock"
DEFAULT_POLL_INTERVAL_S = 10.0
DEFAULT_HTTP_TIMEOUT_S = 10.0


def _positive_float(raw: str | None, default: float) -> float:
    """Parse a strictly positive float, falling back to ``default``.

    Example:
        >>> _positive_float("2.5", 10.0)
        2.5
        >>> _positive_float("-1", 10.0)
        10.0
    """
    try:
        value = float(raw or default)
    except ValueError:
        return default
    return value if value > 0 else default


def missing_settings(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the names of required variables that are unset or empty."""
    env = os.environ if environ is None else environ
    return [name for name in REQUIRED_VARS if not (env.get(name) or "").strip()]


def read_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read all configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings object with all configuration values.

    Note:
        Required values are not validated here; see ``load_settings``.
        Invalid numeric values fall back to their defaults.
    """
    env = os.environ if environ is None else environ
    return Settings(
        TELEGRAM_TOKEN=(env.get("TELEGRAM_TOKEN") or "").strip(),
        CHAT_ID=(env.get("CHAT_ID") or "").strip(),
        DNS_HOSTNAME=(env.get("DNS_HOSTNAME") or "").strip(),
        API_KEY=env.get("API_KEY") or "",
        API_SECRET=env.get("API_SECRET") or "",
        URL=(env.get("URL") or "").strip(),
        INTERFACE=(env.get("INTERFACE") or "").strip(),
        LOCKFILE=Path(env.get("LOCKFILE") or DEFAULT_LOCKFILE),
        POLL_INTERVAL_S=_positive_float(
            env.get("POLL_INTERVAL_S"), DEFAULT_POLL_INTERVAL_S
        ),
        ROUTER_VERIFY_TLS=parse_bool(env.get("ROUTER_VERIFY_TLS"), default=False),
        HTTP_TIMEOUT_S=_positive_float(
            env.get("HTTP_TIMEOUT_S"), DEFAULT_HTTP_TIMEOUT_S
        ),
    )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Validate the environment and return settings, exiting on missing values.

    Raises:
        SystemExit: with status 1 when any required variable is missing.
    """
    missing = missing_settings(environ)
    if missing:
        for name in missing:
            logger.error("%s not found in environment variables", name)
        logger.error("One or more environment variables are missing")
        raise SystemExit(1)
    return read_settings(environ)


__all__ = [
    "REQUIRED_VARS",
    "DEFAULT_LOCKFILE",
    "missing_settings",
    "read_settings",
    "load_settings",
]
