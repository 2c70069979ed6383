"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_requests: int
    strategies: Dict[str, int]
    intents: Dict[str, int]
    fallthroughs: int


class MetricsCollector:
    """Thread-safe counter storage for basic service metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_requests = 0
        self._fallthroughs = 0
        self._strategies: Counter[str] = Counter()
        self._intents: Counter[str] = Counter()

    def record_request(self, intent: str, strategy: str, *, fell_through: bool = False) -> None:
        with self._lock:
            self._total_requests += 1
            self._intents[intent] += 1
            self._strategies[strategy] += 1
            if fell_through:
                self._fallthroughs += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_requests=self._total_requests,
                strategies=dict(self._strategies),
                intents=dict(self._intents),
                fallthroughs=self._fallthroughs,
            )
