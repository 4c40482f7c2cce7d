"""In-process task metrics for AI Studio.

Metric names are dotted, outcome first and feature last, e.g.
``tasks.succeeded.web_search`` or ``tasks.duration_seconds.youtube``.
"""

from dataclasses import dataclass
from threading import Lock
from typing import Any, Optional


@dataclass
class Counter:
    value: int = 0


@dataclass
class Gauge:
    value: float = 0.0


@dataclass
class Histogram:
    count: int = 0
    total: float = 0.0
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    last: Optional[float] = None

    def observe(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.last = value
        self.minimum = value if self.minimum is None else min(self.minimum, value)
        self.maximum = value if self.maximum is None else max(self.maximum, value)

    def summary(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "avg": self.total / self.count if self.count else 0.0,
            "min": self.minimum,
            "max": self.maximum,
            "last": self.last,
        }


class MetricsRegistry:
    """Counters, gauges and histograms shared by the runner and its worker threads."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.counters: dict[str, Counter] = {}
        self.gauges: dict[str, Gauge] = {}
        self.histograms: dict[str, Histogram] = {}

    def inc_counter(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self.counters.setdefault(name, Counter()).value += amount

    def get_counter(self, name: str) -> int:
        with self._lock:
            counter = self.counters.get(name)
            return counter.value if counter else 0

    def counters_by_suffix(self, prefix: str) -> dict[str, int]:
        """Counters under ``prefix.``, keyed by the rest of the name."""
        head = f"{prefix}."
        with self._lock:
            return {
                name[len(head):]: counter.value
                for name, counter in self.counters.items()
                if name.startswith(head)
            }

    def add_gauge(self, name: str, amount: float) -> None:
        with self._lock:
            self.gauges.setdefault(name, Gauge()).value += amount

    def observe(self, name: str, value: float) -> None:
        with self._lock:
            self.histograms.setdefault(name, Histogram()).observe(value)

    def snapshot(self, prefix: str = "") -> dict[str, Any]:
        """Current values, optionally limited to names starting with ``prefix``."""
        with self._lock:
            return {
                "counters": {
                    name: c.value for name, c in self.counters.items() if name.startswith(prefix)
                },
                "gauges": {
                    name: g.value for name, g in self.gauges.items() if name.startswith(prefix)
                },
                "histograms": {
                    name: h.summary()
                    for name, h in self.histograms.items()
                    if name.startswith(prefix)
                },
            }


metrics = MetricsRegistry()
