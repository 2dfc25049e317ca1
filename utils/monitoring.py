import time
import logging
import contextlib
from collections import Counter
from typing import Dict, Any, Optional

logger = logging.getLogger("books-search-lambda")


class MetricsCollector:
    """Per-invocation timings, counters and values, summarised once at the end"""

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or "local"
        self.started = time.monotonic()
        self.counts = Counter()
        self.values: Dict[str, Any] = {}

    @contextlib.contextmanager
    def timer(self, name: str):
        started = time.monotonic()
        try:
            yield
        finally:
            elapsed = time.monotonic() - started
            self.values[f"{name}_time"] = round(elapsed, 3)
            logger.debug(f"[{self.request_id}] {name} took {elapsed:.3f}s")

    def count(self, name: str, amount: int = 1):
        self.counts[name] += amount

    def record(self, name: str, value: Any):
        self.values[name] = value

    def summary(self) -> Dict[str, Any]:
        return {
            **self.values,
            **self.counts,
            "total_elapsed": round(time.monotonic() - self.started, 3),
        }
