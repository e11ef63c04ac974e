"""Alert deduplication: decide, notify and persist once per poll cycle.

``decide`` is a pure function of the observed addresses and the stored alert
state. ``Reconciler.run_cycle`` wraps it with the side effects: at most one
notification and at most one state mutation per cycle. State only advances
after the notification was delivered, so a failed send is retried on the next
cycle instead of being lost.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from .models.alert_state import AlertState
from .models.observation import Action, Decision, Observation
from .notifier import mismatch_message, recovered_message

logger = logging.getLogger(__name__)

__all__ = ["decide", "Reconciler", "Notifier", "StateStore"]


class Notifier(Protocol):
    def send(self, text: str) -> bool: ...


class StateStore(Protocol):
    def read(self) -> AlertState: ...

    def write(self, raised_at: datetime) -> AlertState: ...

    def clear(self) -> AlertState: ...


def decide(observation: Observation, state: AlertState) -> Action:
    if observation.router_ip is None:
        return Action.ROUTER_UNAVAILABLE
    if observation.dns_ip is None:
        return Action.DNS_UNAVAILABLE
    if observation.matches:
        return Action.CLEAR if state.active else Action.STEADY
    return Action.SUPPRESS if state.active else Action.RAISE


def _format_age(age_s: float | None) -> str:
    if age_s is None:
        return "unknown"
    minutes = int(max(0.0, age_s) // 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h{minutes:02d}m"


class Reconciler:
    def __init__(
        self, store: StateStore, notifier: Notifier, hostname: str | None = None
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.hostname = hostname

    def run_cycle(
        self, observation: Observation, now: datetime | None = None
    ) -> Decision:
        state = self.store.read()
        action = decide(observation, state)

        if action is Action.ROUTER_UNAVAILABLE:
            logger.warning("Router IP unavailable, skipping comparison")
            return Decision(action, state)
        if action is Action.DNS_UNAVAILABLE:
            logger.warning("DNS IP unavailable, skipping comparison")
            return Decision(action, state)
        if action is Action.STEADY:
            logger.debug("IP addresses match (%s)", observation.router_ip)
            return Decision(action, state)

        now = now or datetime.now().astimezone()
        if action is Action.SUPPRESS:
            logger.debug(
                "Mismatch persists (router %s, DNS %s), alert active for %s",
                observation.router_ip,
                observation.dns_ip,
                _format_age(state.age_s(now)),
            )
            return Decision(action, state)
        if action is Action.RAISE:
            return self._raise(observation, state, now)
        return self._clear(observation, state)

    def _raise(
        self, observation: Observation, state: AlertState, now: datetime
    ) -> Decision:
        logger.info(
            "IP address is different: router %s, DNS %s",
            observation.router_ip,
            observation.dns_ip,
        )
        text = mismatch_message(
            observation.router_ip or "", observation.dns_ip or "", self.hostname
        )
        if not self.notifier.send(text):
            logger.warning("Failed to send alert, will retry next cycle")
            return Decision(Action.RAISE, state, notified=True, delivered=False)
        try:
            state = self.store.write(now)
        except OSError:
            logger.warning(
                "Alert sent but state could not be persisted", exc_info=True
            )
        else:
            logger.info("Alert sent")
        return Decision(Action.RAISE, state, notified=True, delivered=True)

    def _clear(self, observation: Observation, state: AlertState) -> Decision:
        logger.info("IP addresses are the same again (%s)", observation.router_ip)
        text = recovered_message(observation.router_ip or "", self.hostname)
        if not self.notifier.send(text):
            logger.warning("Failed to send recovery message, will retry next cycle")
            return Decision(Action.CLEAR, state, notified=True, delivered=False)
        try:
            state = self.store.clear()
        except OSError:
            logger.warning(
                "Recovery sent but state could not be cleared", exc_info=True
            )
        else:
            logger.info("Alarm has been reset")
        return Decision(Action.CLEAR, state, notified=True, delivered=True)
