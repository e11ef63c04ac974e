"""Router management API client returning the current WAN address."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from .utils import dig, normalize_ipv4

__all__ = ["fetch_wan_ip", "parse_wan_ip"]

logger = logging.getLogger(__name__)

_TIMEOUT_S = 10.0


def parse_wan_ip(payload: Any, interface: str) -> str | None:
    """Extract ``payload[interface]["ipv4"][0]["ipaddr"]`` as an IPv4 string.

    Example:
        >>> parse_wan_ip({"igb3": {"ipv4": [{"ipaddr": "192.168.1.1"}]}}, "igb3")
        '192.168.1.1'
    """
    if not isinstance(payload, dict):
        logger.warning("Router API returned %s, expected an object", type(payload).__name__)
        return None
    iface = dig(payload, interface)
    if iface is None:
        logger.warning('Failed to get "%s" from router response', interface)
        return None
    addresses = dig(iface, "ipv4")
    if not isinstance(addresses, list) or not addresses:
        logger.warning('Failed to get "ipv4" for interface "%s"', interface)
        return None
    raw = dig(addresses, 0, "ipaddr")
    ip = normalize_ipv4(raw)
    if ip is None:
        logger.warning('Invalid "ipaddr" for interface "%s": %r', interface, raw)
    return ip


def fetch_wan_ip(
    url: str,
    api_key: str,
    api_secret: str,
    interface: str,
    timeout_s: float = _TIMEOUT_S,
    verify_tls: bool = False,
) -> str | None:
    """Ask the router for the WAN address of ``interface``.

    Returns None on transport errors, HTTP errors and malformed bodies; this
    function never raises for those.
    """
    if not verify_tls:
        # Routers normally serve a self-signed certificate
        requests.packages.urllib3.disable_warnings(InsecureRequestWarning)
    try:
        resp = requests.get(
            url,
            auth=(api_key, api_secret),
            timeout=timeout_s,
            verify=verify_tls,
        )
    except requests.RequestException as exc:
        logger.warning("Failed to reach router API: %s", exc)
        return None
    if not resp.ok:
        logger.warning("Router API returned HTTP %s", resp.status_code)
        return None
    try:
        payload = resp.json()
    except ValueError as exc:
        logger.warning("Failed to parse router API JSON: %s", exc)
        return None
    return parse_wan_ip(payload, interface)
