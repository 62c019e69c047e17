import threading

from termtitle.interval_timer import IntervalTimer


def test_fires_repeatedly():
    ticks = []
    fired = threading.Event()

    def _callback():
        ticks.append(1)
        if len(ticks) >= 3:
            fired.set()

    timer = IntervalTimer(0.01, _callback)
    try:
        assert fired.wait(5)
    finally:
        timer.cancel()
    assert len(ticks) >= 3


def test_cancel_stops_ticks():
    ticks = []
    timer = IntervalTimer(0.01, lambda: ticks.append(1))
    timer.cancel()
    count = len(ticks)
    threading.Event().wait(0.05)
    assert len(ticks) == count
    assert not timer.active


def test_cancel_is_idempotent():
    timer = IntervalTimer(10, lambda: None)
    assert timer.active
    timer.cancel()
    timer.cancel()
    assert not timer.active


def test_cancel_from_inside_tick():
    done = threading.Event()
    holder = {}

    def _callback():
        holder['timer'].cancel()
        done.set()

    holder['timer'] = IntervalTimer(0.01, _callback)
    assert done.wait(5)
    assert not holder['timer'].active


def test_failing_tick_stops_timer(monkeypatch):
    raised = threading.Event()
    errors = []

    def _hook(args):
        errors.append(args.exc_type)
        raised.set()

    monkeypatch.setattr(threading, 'excepthook', _hook)

    def _callback():
        raise ValueError('closed stream')

    timer = IntervalTimer(0.01, _callback)
    assert raised.wait(5)
    timer.cancel()
    assert errors == [ValueError]
    assert not timer.active
