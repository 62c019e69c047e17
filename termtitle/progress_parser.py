"""
Progress Line Parser
====================

Turns lines printed by a long running tool into reporter updates.

Recognized forms:
    12/40 Encoding chunks          done/total, then text
    12/40 +3 Encoding chunks       done/total, running, then text
    done=12 total=40 running=3     key=value pairs (text=... takes the rest)
Any other non-blank line becomes a text-only update.
"""

from __future__ import annotations

import re


__all__ = [
    'COUNT_KEYS',
    'parse_progress_line',
]

COUNT_KEYS = ('remaining', 'executing', 'running', 'done', 'completed', 'total')

_FRACTION_PATTERN = re.compile(r'^(?P<done>\d+)\s*/\s*(?P<total>\d+)(?:\s+\+(?P<running>\d+))?(?:\s+(?P<text>.*))?$')
_PAIR_PATTERN = re.compile(r'(?P<key>\w+)=(?P<value>\S*)')


def _parse_pairs(line: str) -> tuple[str, dict] | None:
    text = ''
    text_pos = line.find('text=')
    if text_pos == 0 or (text_pos > 0 and line[text_pos - 1].isspace()):
        text = line[text_pos + len('text='):].strip()
        line = line[:text_pos]

    tokens = line.split()
    if not tokens and not text:
        return None

    counts = {}
    for token in tokens:
        match = _PAIR_PATTERN.fullmatch(token)
        if not match or match.group('key') not in COUNT_KEYS or not match.group('value').isdigit():
            return None
        counts[match.group('key')] = int(match.group('value'))

    return text, counts


def parse_progress_line(line: str) -> tuple[str, dict] | None:
    """
    Parse one line of tool output.

    Parameters
    ----------
    line : str
        Raw output line, trailing newline allowed.

    Returns
    -------
    tuple of (str, dict) or None
        ``(text, counts)`` ready for `TitleReporter.update`, or None for
        blank lines.
    """
    line = line.strip()
    if not line:
        return None

    match = _FRACTION_PATTERN.match(line)
    if match:
        done = int(match.group('done'))
        total = int(match.group('total'))
        running = int(match.group('running') or 0)
        counts = {
            'done': done,
            'total': total,
            'running': running,
            'remaining': max(total - done - running, 0),
        }
        return match.group('text') or '', counts

    if '=' in line:
        parsed = _parse_pairs(line)
        if parsed is not None:
            return parsed

    return line, {}
