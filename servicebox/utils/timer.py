import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class PerformanceTimer:
    """
    量測一段程式的耗時，結束時以 DEBUG 記錄

    區塊內拋出例外時仍會記下耗時，供失敗的 factory 呼叫回報指標。
    """

    def __init__(self, label: str):
        self.label = label
        self._started: Optional[float] = None
        self.elapsed_ms: float = 0.0

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000

    def __enter__(self) -> "PerformanceTimer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        outcome = "failed" if exc_type else "done"
        logger.debug("⏱️  %s %s after %.1f ms", self.label, outcome, self.elapsed_ms)
