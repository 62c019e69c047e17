from termtitle.progress_counts import Counts, normalize_counts


def test_defaults_to_zero():
    assert normalize_counts() == Counts(0, 0, 0, 0)
    assert normalize_counts({}) == Counts(0, 0, 0, 0)


def test_canonical_keys():
    counts = normalize_counts({'remaining': 3, 'executing': 2, 'done': 5, 'total': 10})
    assert counts == Counts(remaining=3, executing=2, done=5, total=10)


def test_aliases():
    counts = normalize_counts({'running': 4, 'completed': 6, 'total': 10})
    assert counts.executing == 4
    assert counts.done == 6


def test_truthy_canonical_wins_over_alias():
    counts = normalize_counts({'executing': 1, 'running': 9, 'done': 2, 'completed': 8})
    assert counts.executing == 1
    assert counts.done == 2


def test_zero_canonical_falls_back_to_alias():
    counts = normalize_counts({'executing': 0, 'running': 5, 'done': 0, 'completed': 7})
    assert counts.executing == 5
    assert counts.done == 7


def test_unknown_keys_ignored():
    counts = normalize_counts({'total': 1, 'failed': 3})
    assert counts == Counts(total=1)
