"""Small helpers shared by the address sources and the reconciler."""

from __future__ import annotations

import ipaddress
from typing import Any

__all__ = ["normalize_ipv4", "dig", "parse_bool"]

_MISSING = object()

_BOOL_TRUE = {"1", "true", "yes", "on"}


def normalize_ipv4(value: object) -> str | None:
    """Return the canonical dotted-decimal form of an IPv4 address.

    Args:
        value: Raw address as returned by a lookup (usually a string).

    Returns:
        The normalised address, or None when the value is missing, empty or
        not a valid IPv4 address.

    Example:
        >>> normalize_ipv4(" 192.168.1.1 ")
        '192.168.1.1'
        >>> normalize_ipv4("::1") is None
        True
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return str(ipaddress.IPv4Address(text))
    except ValueError:
        return None


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists and return the value at ``path`` or None.

    Every step is checked; a missing key, an out-of-range index or a value of
    the wrong container type ends the walk with None instead of raising.
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step, _MISSING)
            if current is _MISSING:
                return None
    return current


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _BOOL_TRUE
