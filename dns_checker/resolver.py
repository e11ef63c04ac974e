"""Public DNS lookups for the monitored hostname."""

from __future__ import annotations

import logging
from typing import Sequence

import dns.exception
import dns.resolver

from .utils import normalize_ipv4

__all__ = ["resolve_ipv4", "GOOGLE_NAMESERVERS"]

logger = logging.getLogger(__name__)

# Public resolvers, so the answer reflects what the internet sees rather than
# a local split-horizon override.
GOOGLE_NAMESERVERS: tuple[str, ...] = ("8.8.8.8", "8.8.4.4")
_TIMEOUT_S = 5.0


def _build_resolver(
    nameservers: Sequence[str], timeout_s: float
) -> dns.resolver.Resolver:
    resolver = dns.resolver.Resolver(configure=False)
    resolver.nameservers = list(nameservers)
    resolver.lifetime = timeout_s
    return resolver


def resolve_ipv4(
    hostname: str,
    nameservers: Sequence[str] = GOOGLE_NAMESERVERS,
    timeout_s: float = _TIMEOUT_S,
) -> str | None:
    """Return the first IPv4 address published for ``hostname``, or None."""
    resolver = _build_resolver(nameservers, timeout_s)
    try:
        answer = resolver.resolve(hostname, "A")
    except dns.resolver.NXDOMAIN:
        logger.warning("Hostname %s does not exist", hostname)
        return None
    except dns.resolver.NoAnswer:
        logger.warning("No IPv4 addresses found for hostname: %s", hostname)
        return None
    except dns.exception.DNSException as exc:
        logger.warning("Failed to lookup IP address for %s: %s", hostname, exc)
        return None

    for rdata in answer:
        ip = normalize_ipv4(rdata.to_text())
        if ip is not None:
            return ip
    logger.warning("No IPv4 addresses found for hostname: %s", hostname)
    return None
