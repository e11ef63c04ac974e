"""Entrypoint for running the DNS checker daemon.

This module wires up settings, the address sources and the reconciler, then
polls until SIGTERM or SIGINT is received.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable

from . import config, resolver, router_api
from .logger import setup_logging
from .models.observation import Decision, Observation
from .models.settings import Settings
from .notifier import TelegramNotifier
from .reconciler import Reconciler
from .store import AlertStateStore

logger = logging.getLogger(__name__)

# 180 cycles at the default 10 s interval
MILESTONE_CYCLES = 180


class Checker:
    """One poll cycle: fetch both addresses, then reconcile."""

    def __init__(
        self,
        settings: Settings,
        reconciler: Reconciler | None = None,
        fetch_router_ip: Callable[[], str | None] | None = None,
        fetch_dns_ip: Callable[[], str | None] | None = None,
    ) -> None:
        self.settings = settings
        self.reconciler = reconciler or Reconciler(
            AlertStateStore(settings.LOCKFILE),
            TelegramNotifier(
                settings.TELEGRAM_TOKEN,
                settings.CHAT_ID,
                timeout_s=settings.HTTP_TIMEOUT_S,
            ),
            hostname=settings.DNS_HOSTNAME,
        )
        self._fetch_router_ip = fetch_router_ip or self._router_ip
        self._fetch_dns_ip = fetch_dns_ip or self._dns_ip

    def _router_ip(self) -> str | None:
        s = self.settings
        return router_api.fetch_wan_ip(
            s.URL,
            s.API_KEY,
            s.API_SECRET,
            s.INTERFACE,
            timeout_s=s.HTTP_TIMEOUT_S,
            verify_tls=s.ROUTER_VERIFY_TLS,
        )

    def _dns_ip(self) -> str | None:
        return resolver.resolve_ipv4(self.settings.DNS_HOSTNAME)

    def observe(self) -> Observation:
        router_ip = self._fetch_router_ip()
        dns_ip = self._fetch_dns_ip()
        logger.debug(
            "The IP address of %s is: %s, WAN IP address is: %s",
            self.settings.DNS_HOSTNAME,
            dns_ip,
            router_ip,
        )
        return Observation(router_ip=router_ip, dns_ip=dns_ip)

    def cycle(self) -> Decision:
        return self.reconciler.run_cycle(self.observe())


def run_loop(
    checker: Checker,
    stop: threading.Event,
    interval_s: float,
    max_cycles: int | None = None,
) -> int:
    """Run cycles until ``stop`` is set; returns the number of cycles run.

    ``stop`` is only checked between cycles, so a cycle (and any state write
    it makes) always completes.
    """
    cycles = 0
    logger.info("Verifying IPs every %ss", interval_s)
    while not stop.is_set():
        try:
            checker.cycle()
        except Exception:
            logger.exception("Unexpected error during check cycle")
        cycles += 1
        if cycles % MILESTONE_CYCLES == 0:
            logger.info("%d minutes passed", int(MILESTONE_CYCLES * interval_s // 60))
        if max_cycles is not None and cycles >= max_cycles:
            break
        logger.debug("Sleeping for %s seconds", interval_s)
        stop.wait(interval_s)
    return cycles


def install_signal_handlers(stop: threading.Event) -> None:
    def _handle(signum, _frame) -> None:
        logger.info("Received %s, stopping after current cycle", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGTERM, _handle)
    signal.signal(signal.SIGINT, _handle)


def run() -> None:
    setup_logging()
    logger.info("Starting DNS checker")
    settings = config.load_settings()
    logger.debug("Loaded %r", settings)

    stop = threading.Event()
    install_signal_handlers(stop)
    run_loop(Checker(settings), stop, settings.POLL_INTERVAL_S)
    logger.info("DNS checker stopped")


if __name__ == "__main__":
    run()
