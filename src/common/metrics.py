from dataclasses import dataclass
from typing import Dict, List
import time

@dataclass
class RefreshMetrics:
    """Refresh loop health metrics"""
    attempts: int
    successes: int
    failures: int
    skipped: int
    avg_fetch_time_ms: float
    uptime_seconds: float

    def to_dict(self) -> Dict:
        return {
            'attempts': self.attempts,
            'successes': self.successes,
            'failures': self.failures,
            'skipped': self.skipped,
            'avg_fetch_time_ms': self.avg_fetch_time_ms,
            'uptime_seconds': self.uptime_seconds
        }


class RefreshMetricsCollector:
    """Collects and aggregates refresh controller metrics"""

    def __init__(self):
        self.fetch_times: List[float] = []
        self.attempts = 0
        self.successes = 0
        self.failures = 0
        self.skipped = 0
        self.start_time = time.time()

    def record_fetch(self, duration_ms: float, succeeded: bool):
        self.attempts += 1
        if succeeded:
            self.successes += 1
        else:
            self.failures += 1
        self.fetch_times.append(duration_ms)
        # Keep buffer size manageable
        if len(self.fetch_times) > 1000:
            self.fetch_times.pop(0)

    def record_skip(self):
        self.skipped += 1

    def get_metrics(self) -> RefreshMetrics:
        avg_fetch = sum(self.fetch_times) / len(self.fetch_times) if self.fetch_times else 0.0

        return RefreshMetrics(
            attempts=self.attempts,
            successes=self.successes,
            failures=self.failures,
            skipped=self.skipped,
            avg_fetch_time_ms=avg_fetch,
            uptime_seconds=time.time() - self.start_time
        )
