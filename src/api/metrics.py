"""Metrics service for tracking recommendation performance.

Singleton service to track ranking calls and latency metrics.
"""

import threading
from typing import Dict


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters and latency tracking for ranking calls.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._reset_counters()
        self._initialized = True

    def _reset_counters(self) -> None:
        self._ranking_count = 0
        self._personalized_count = 0
        self._total_latency_ms = 0.0
        self._min_latency_ms = float("inf")
        self._max_latency_ms = 0.0

    def record_ranking(self, latency_ms: float, personalized: bool) -> None:
        """Record a ranking call with its latency.

        Args:
            latency_ms: Latency in milliseconds
            personalized: Whether the scored path was used
        """
        with self._lock:
            self._ranking_count += 1
            if personalized:
                self._personalized_count += 1
            self._total_latency_ms += latency_ms
            self._min_latency_ms = min(self._min_latency_ms, latency_ms)
            self._max_latency_ms = max(self._max_latency_ms, latency_ms)

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with metrics including:
            - ranking_count: Total number of ranking calls
            - personalized_count: Calls served from quiz answers
            - fallback_count: Calls served the featured rail
            - average_latency_ms: Average latency in milliseconds
            - min_latency_ms: Minimum latency observed
            - max_latency_ms: Maximum latency observed
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._ranking_count
                if self._ranking_count > 0
                else 0.0
            )
            min_latency = (
                self._min_latency_ms if self._min_latency_ms != float("inf") else 0.0
            )

            return {
                "ranking_count": self._ranking_count,
                "personalized_count": self._personalized_count,
                "fallback_count": self._ranking_count - self._personalized_count,
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": round(min_latency, 2),
                "max_latency_ms": round(self._max_latency_ms, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._reset_counters()


# Global singleton instance
metrics_service = MetricsService()
