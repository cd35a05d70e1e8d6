# pipelines/crawl_orchestrator/orchestrator_utils.py
"""
Utility functions for orchestrator operations.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .orchestrator_config import OrchestratorConfig


@dataclass
class BatchReport:
    """
    Outcome of a batch traversal: saved, skipped and failed item counts.
    """

    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    failed_urls: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + self.failed

    def record_failure(self, url: str) -> None:
        self.failed += 1
        self.failed_urls.append(url)

    def merge(self, other: "BatchReport") -> "BatchReport":
        self.succeeded += other.succeeded
        self.skipped += other.skipped
        self.failed += other.failed
        self.failed_urls.extend(other.failed_urls)
        return self

    def summary(self) -> str:
        return (
            f"{self.succeeded} saved, {self.skipped} skipped, {self.failed} failed"
        )


class OrchestratorUtils:
    """
    Utility class providing helper methods for orchestrator operations.
    """

    @staticmethod
    def format_url_for_display(url: str, max_length: Optional[int] = None) -> str:
        """
        Truncate a URL for log lines and tables.
        """
        if max_length is None:
            max_length = OrchestratorConfig.URL_DISPLAY_LENGTH

        if len(url) <= max_length:
            return url

        return f"{url[:max_length]}{OrchestratorConfig.URL_ELLIPSIS}"

    @staticmethod
    def polite_delay(
        sleep: Callable[[float], None],
        rng: random.Random,
        delay_range: Tuple[float, float],
    ) -> float:
        """
        Sleep a random time within ``delay_range`` between two navigations
        to the same host.

        Returns:
            The delay that was slept
        """
        low, high = delay_range
        delay = rng.uniform(low, high) if high > low else low
        if delay > 0:
            sleep(delay)
        return delay
