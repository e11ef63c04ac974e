"""Tests for DNS resolution (resolver is faked, no network)."""

import dns.exception
import dns.resolver

from dns_checker import resolver


class FakeRdata:
    def __init__(self, text: str) -> None:
        self._text = text

    def to_text(self) -> str:
        return self._text


class FakeResolver:
    def __init__(self, answer=None, error: Exception | None = None) -> None:
        self.answer = answer or []
        self.error = error
        self.queries: list[tuple[str, str]] = []

    def resolve(self, hostname: str, rdtype: str):
        self.queries.append((hostname, rdtype))
        if self.error is not None:
            raise self.error
        return self.answer


def _install(monkeypatch, fake: FakeResolver) -> list:
    built = []

    def fake_build(nameservers, timeout_s):
        built.append((list(nameservers), timeout_s))
        return fake

    monkeypatch.setattr(resolver, "_build_resolver", fake_build)
    return built


def test_resolve_returns_first_ipv4(monkeypatch) -> None:
    fake = FakeResolver([FakeRdata("93.184.216.34"), FakeRdata("93.184.216.35")])
    built = _install(monkeypatch, fake)

    assert resolver.resolve_ipv4("example.com") == "93.184.216.34"
    assert fake.queries == [("example.com", "A")]
    assert built == [(["8.8.8.8", "8.8.4.4"], 5.0)]


def test_resolve_nxdomain(monkeypatch) -> None:
    _install(monkeypatch, FakeResolver(error=dns.resolver.NXDOMAIN()))
    assert resolver.resolve_ipv4("missing.example.com") is None


def test_resolve_no_ipv4_records(monkeypatch) -> None:
    _install(monkeypatch, FakeResolver(error=dns.resolver.NoAnswer()))
    assert resolver.resolve_ipv4("v6only.example.com") is None


def test_resolve_timeout(monkeypatch) -> None:
    _install(monkeypatch, FakeResolver(error=dns.exception.Timeout()))
    assert resolver.resolve_ipv4("example.com") is None


def test_build_resolver_sets_lifetime() -> None:
    built = resolver._build_resolver(["1.1.1.1"], 2.0)
    assert built.lifetime == 2.0
