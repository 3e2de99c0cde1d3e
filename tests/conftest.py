"""Shared fixtures"""

from __future__ import annotations

import pytest

from waitfor.application import waiter


class FakeClock:
    """Stands in for the time module inside the waiter"""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingLogger:
    """printf-style logger that keeps every call"""

    def __init__(self):
        self.entries: list[tuple[str, tuple]] = []

    def __call__(self, fmt, *args):
        self.entries.append((fmt, args))

    @property
    def lines(self) -> list[str]:
        return [fmt % args for fmt, args in self.entries]


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(waiter, "time", fake)
    return fake


@pytest.fixture
def log():
    return RecordingLogger()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "WAITFOR_LIMIT",
        "WAITFOR_MIN_INTERVAL",
        "WAITFOR_MAX_INTERVAL",
        "WAITFOR_BACKOFF",
        "WAITFOR_REPORTS",
        "WAITFOR_DESCRIPTION",
        "WAITFOR_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
