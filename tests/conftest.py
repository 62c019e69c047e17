from __future__ import annotations

import io

import pytest


class FakeTimer:
    """Manually driven stand-in for IntervalTimer."""

    def __init__(self, seconds, callback):
        self.seconds = seconds
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Creates FakeTimers and advances simulated time across them."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, seconds, callback):
        timer = FakeTimer(seconds, callback)
        self.timers.append(timer)
        return timer

    def tick(self, periods=1):
        for _ in range(periods):
            for timer in self.timers:
                if not timer.cancelled:
                    timer.callback()


class CountingStream(io.StringIO):
    """StringIO that records every write call."""

    def __init__(self):
        super().__init__()
        self.writes: list[str] = []

    def write(self, s):
        self.writes.append(s)
        return super().write(s)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stream():
    return CountingStream()
