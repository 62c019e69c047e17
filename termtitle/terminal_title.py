"""
Terminal Title Output
=====================

Builds and writes the escape sequence payload that sets a terminal window title.
Works with any terminal emulator that understands OSC 0.
"""

from __future__ import annotations

import sys
from typing import TextIO


__all__ = [
    'OSC_TITLE_OPEN',
    'BEL_TITLE_CLOSE',
    'compose_title_output',
    'write_title',
]

# \033]0;TITLE\007 sets window title
OSC_TITLE_OPEN = '\x1b]0;'
BEL_TITLE_CLOSE = '\x07'


def compose_title_output(title: str, open_seq: str = OSC_TITLE_OPEN, close_seq: str = BEL_TITLE_CLOSE, log: bool = False) -> str:
    """
    Wrap a title in its control sequences.

    Parameters
    ----------
    title : str
        Title text to show.
    open_seq : str
        Characters that start the title.
    close_seq : str
        Characters that terminate the title.
    log : bool
        If True and the title is not empty, the plain title plus a newline
        is appended so it also shows up in the scrollback.

    Returns
    -------
    str
        The complete payload to write.
    """
    output = f'{open_seq}{title}{close_seq}'
    if log and title:
        output += f'{title}\n'
    return output


def write_title(output: str, stream: TextIO | None = None) -> None:
    """
    Write a composed title payload in a single write and flush it.

    Parameters
    ----------
    output : str
        Payload from `compose_title_output`.
    stream : TextIO, optional
        Target stream. Resolved to the current ``sys.stdout`` when omitted.
    """
    if stream is None:
        stream = sys.stdout
    stream.write(output)
    stream.flush()
