"""
Progress Counts
===============

The four-field progress tally and normalization of caller supplied counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


__all__ = [
    'Counts',
    'normalize_counts',
]


@dataclass
class Counts:
    """Progress tally shown in the title."""
    remaining: Any = 0
    executing: Any = 0
    done: Any = 0
    total: Any = 0


def normalize_counts(counts: Mapping[str, Any] | None = None) -> Counts:
    """
    Build a `Counts` from caller input, resolving alias keys.

    ``running`` is accepted for ``executing`` and ``completed`` for ``done``.
    The canonical key is used when it is truthy, otherwise the alias is, so
    ``{'executing': 0, 'running': 5}`` yields ``executing=5``. Values are not
    validated.

    Parameters
    ----------
    counts : Mapping, optional
        Counts input. Missing keys default to 0, unknown keys are ignored.

    Returns
    -------
    Counts
        Normalized counts.
    """
    counts = counts or {}
    return Counts(
        remaining=counts.get('remaining', 0),
        executing=counts.get('executing', 0) or counts.get('running', 0),
        done=counts.get('done', 0) or counts.get('completed', 0),
        total=counts.get('total', 0),
    )
