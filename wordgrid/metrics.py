import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordgrid")


class StageTimer:
    """Per-stage wall clock timings for building and serving one puzzle."""

    def __init__(self, label: str = "puzzle"):
        self.label = label
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = round((time.perf_counter() - t0) * 1000, 1)  # ms
            # repeated stages accumulate
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed, 1)
            logger.info("%s stage=%s elapsed=%.1fms", self.label, name, elapsed)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}
