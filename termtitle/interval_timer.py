"""
Interval Timer
==============

Repeating timer backed by a daemon thread and a stop event.
"""

from __future__ import annotations

import threading
from typing import Callable


__all__ = ['IntervalTimer']


class IntervalTimer:
    """
    Call a function every ``seconds`` until cancelled.

    The timer starts on construction. Ticks run one after another on a single
    worker thread, so a callback never overlaps with itself. If the callback
    raises, the timer stops and `active` turns False.

    Parameters
    ----------
    seconds : float
        Period between calls.
    callback : Callable[[], object]
        Function to call on every tick.
    """

    def __init__(self, seconds: float, callback: Callable[[], object]):
        self.seconds = seconds
        self.callback = callback
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name='title-interval', daemon=True)
        self._thread.start()

    def _run(self) -> None:
        # wait() returns True once cancelled
        while not self._stop.wait(self.seconds):
            try:
                self.callback()
            except BaseException:
                # A failed tick ends the timer, the error still reaches threading.excepthook
                self._stop.set()
                raise

    @property
    def active(self) -> bool:
        return not self._stop.is_set()

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once, also from inside a tick."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
