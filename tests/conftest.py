"""Shared test fixtures and dummy classes."""

from __future__ import annotations

from datetime import datetime

import pytest

from dns_checker.models.alert_state import AlertState
from dns_checker.store import AlertStateStore


class DummyResponse:
    """Dummy HTTP response for testing.

    Pass an exception instance as ``data`` to make ``json()`` raise it.
    """

    def __init__(self, data: object, status: int = 200, text: str = "") -> None:
        self._data = data
        self.status_code = status
        self.text = text or str(data)
        self.ok = 200 <= status < 300

    def json(self) -> object:
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


class DummyNotifier:
    """Records sent messages and answers with a fixed result."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[str] = []

    def send(self, text: str) -> bool:
        self.sent.append(text)
        return self.result


class MemoryStore:
    """In-memory stand-in for AlertStateStore."""

    def __init__(self, state: AlertState | None = None) -> None:
        self.state = state or AlertState()
        self.writes: list[datetime] = []
        self.clears = 0
        self.fail_writes = False

    def read(self) -> AlertState:
        return self.state

    def write(self, raised_at: datetime) -> AlertState:
        if self.fail_writes:
            raise OSError("disk full")
        self.writes.append(raised_at)
        self.state = AlertState.raised(raised_at)
        return self.state

    def clear(self) -> AlertState:
        if self.fail_writes:
            raise OSError("read-only filesystem")
        self.clears += 1
        self.state = AlertState()
        return self.state


@pytest.fixture
def state_store(tmp_path) -> AlertStateStore:
    return AlertStateStore(tmp_path / "telegram.lock")
