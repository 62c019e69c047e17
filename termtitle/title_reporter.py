"""
Title Reporter
==============

Shows live progress in the terminal window/tab title.

The reporter keeps the latest text and counts, formats them into a short title
and writes it wrapped in terminal control sequences whenever the title changes.
Writes happen on every `update` when the interval is 0, otherwise on the ticks
of a repeating timer.

Usage:
    reporter = TitleReporter.create(interval=500).start()
    reporter.update('Rendering', {'total': 10, 'done': 3, 'running': 2})
    ...
    reporter.stop()
"""

from __future__ import annotations

import math
import threading
from typing import Any, Callable, Mapping, TextIO

from termtitle.interval_timer import IntervalTimer
from termtitle.progress_counts import Counts, normalize_counts
from termtitle.terminal_title import BEL_TITLE_CLOSE, OSC_TITLE_OPEN, compose_title_output, write_title


__all__ = [
    'DEFAULT_OPTIONS',
    'TitleReporter',
    'TitleStateError',
]

DEFAULT_OPTIONS = {
    'verbose': False,   # True: every count, False: % complete and running tasks
    'log': False,       # also print each title to the stream
    'interval': 1000,   # milliseconds between title updates, 0 = on every update
    'open': OSC_TITLE_OPEN,
    'close': BEL_TITLE_CLOSE,
}


class TitleStateError(RuntimeError):
    """Raised when a write is attempted before any title was computed."""
    pass


class TitleReporter:
    """
    Throttled progress reporter for the terminal title.

    A reporter must be driven from one caller thread. Timer ticks run on the
    timer's own thread and are serialized with the caller through a lock.

    Parameters
    ----------
    options : Mapping, optional
        Overrides for `DEFAULT_OPTIONS`. Unknown keys are kept and ignored.
    stream : TextIO, optional
        Where titles are written. Defaults to ``sys.stdout`` at write time.
    timer_factory : Callable, optional
        ``timer_factory(seconds, callback)`` returning an object with a
        ``cancel()`` method. Defaults to `IntervalTimer`.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        stream: TextIO | None = None,
        timer_factory: Callable[[float, Callable[[], object]], Any] = IntervalTimer,
    ):
        self.config: dict[str, Any] = {**DEFAULT_OPTIONS, **(options or {})}
        self.title: str | None = None
        self.text: str | None = None
        self.counts = Counts()
        self.timer = None
        self.stream = stream
        self.timer_factory = timer_factory
        self._lock = threading.RLock()

    @classmethod
    def create(cls, options: Mapping[str, Any] | None = None, **kwargs) -> TitleReporter:
        """Create a reporter, merging keyword options over ``options``."""
        stream = kwargs.pop('stream', None)
        timer_factory = kwargs.pop('timer_factory', IntervalTimer)
        return cls({**(options or {}), **kwargs}, stream=stream, timer_factory=timer_factory)

    def __enter__(self) -> TitleReporter:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def active(self) -> bool:
        """True while the repeating timer is armed."""
        return self.timer is not None

    def configure(self, options: Mapping[str, Any] | None = None, **kwargs) -> TitleReporter:
        """Shallow-merge options over the current configuration."""
        with self._lock:
            self.config.update(options or {})
            self.config.update(kwargs)
        return self

    def update(self, text: str | None = '', counts: Mapping[str, Any] | None = None) -> TitleReporter:
        """
        Replace the reported state.

        Parameters
        ----------
        text : str, optional
            Text placed at the start of the title.
        counts : Mapping, optional
            ``remaining``, ``executing`` (alias ``running``), ``done``
            (alias ``completed``) and ``total``.

        Returns
        -------
        TitleReporter
            This reporter, for chaining.
        """
        with self._lock:
            self.text = text
            self.counts = normalize_counts(counts)
            if not self.config['interval']:
                self.refresh()
        return self

    def refresh(self, title: str | None = None) -> TitleReporter:
        """
        Write the title if it changed.

        Parameters
        ----------
        title : str, optional
            Title to write. Computed by `format` when omitted.
        """
        with self._lock:
            if title is None:
                title = self.format()
            if title is not None and title != self.title:
                self.title = title
                self._write()
        return self

    def _write(self) -> None:
        if self.title is None:
            raise TitleStateError('title was None, this should never happen')
        output = compose_title_output(self.title, self.config['open'], self.config['close'], self.config['log'])
        write_title(output, self.stream)

    def format(self) -> str | None:
        """
        Build the title from the current state.

        Returns
        -------
        str or None
            The title, or None when there is nothing to show.
        """
        text = self.text
        counts = self.counts
        if counts.total:
            prefix = f'{text} ' if text else ''
            if self.config['verbose']:
                return (
                    f'{prefix}[{counts.remaining} remaining] [{counts.executing} executing] '
                    f'[{counts.done} completed] [{counts.total} total]'
                )
            # Round half up
            completed = math.floor(counts.done / counts.total * 100 + 0.5)
            status = f'{prefix}[{completed}%'
            if counts.executing:
                return f'{status} — {counts.executing} running]'
            return f'{status}]'
        if text:
            return text
        return None

    def pause(self) -> TitleReporter:
        """Cancel the repeating timer, if any."""
        with self._lock:
            timer, self.timer = self.timer, None
        # Cancel outside the lock, a pending tick may be waiting for it
        if timer is not None:
            timer.cancel()
        return self

    def resume(self, interval: int | None = None) -> TitleReporter:
        """
        (Re)arm the repeating timer.

        Parameters
        ----------
        interval : int, optional
            New interval in milliseconds. No timer is armed when the
            interval is 0.
        """
        self.pause()
        with self._lock:
            if interval is not None:
                self.config['interval'] = interval
            if self.config['interval']:
                self.timer = self.timer_factory(self.config['interval'] / 1000, self.refresh)
        return self

    def start(self) -> TitleReporter:
        """Write an empty title and arm the timer."""
        return self.refresh('').resume()

    def stop(self) -> TitleReporter:
        """Cancel the timer and write an empty title."""
        return self.pause().refresh('')
