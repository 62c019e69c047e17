import threading

from termtitle.title_reporter import TitleReporter


def test_real_timer_writes_title(stream):
    written = threading.Event()

    class _Stream(type(stream)):
        def write(self, s):
            result = super().write(s)
            if 'threaded' in s:
                written.set()
            return result

    out = _Stream()
    reporter = TitleReporter.create(interval=10, stream=out).start()
    try:
        reporter.update('threaded', {'total': 2, 'done': 1})
        assert written.wait(5)
    finally:
        reporter.stop()
    assert '\x1b]0;threaded [50%]\x07' in out.writes
    assert out.writes[-1] == '\x1b]0;\x07'
    assert not reporter.active
