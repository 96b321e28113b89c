"""
Per-stage wall-clock accounting for the line pipeline.

    >>> timer = StageTimer()
    >>> with timer.stage('parse'):
    ...     tree = parse(line)
    >>> timer.summary()
    'parse 1.8 µs'
"""

import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping

# (unit, nanoseconds per unit, decimals), largest first
_UNITS = (
    ('s', 1_000_000_000, 3),
    ('ms', 1_000_000, 2),
    ('µs', 1_000, 1),
)


class StageTimer:
    """Accumulates nanoseconds spent in named stages."""

    def __init__(self):
        self.totals: Dict[str, int] = defaultdict(int)

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self.totals[name] += time.perf_counter_ns() - start

    def merge(self, totals: Mapping[str, int]):
        """Add totals recorded elsewhere, e.g. in a worker process."""
        for name, ns in totals.items():
            self.totals[name] += ns

    def summary(self) -> str:
        return ", ".join(
            f"{name} {format_ns(ns)}" for name, ns in self.totals.items()
        )


def format_ns(ns: float) -> str:
    """Format a nanosecond duration with the largest unit that fits."""
    for unit, scale, decimals in _UNITS:
        if ns >= scale:
            return f"{ns / scale:.{decimals}f} {unit}"
    return f"{ns:.0f} ns"
