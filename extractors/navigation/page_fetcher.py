# extractors/navigation/page_fetcher.py
"""
Single entry point for retrieving page HTML.
"""

import logging
from typing import List, Optional, Sequence

from configurations.settings_fetcher import FetcherConfig
from exceptions import FetchFailed

from .browser_poller import BrowserPoller
from .fetch_strategies import DirectFetchStrategy, FetchStrategy, SolverFetchStrategy

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Runs an ordered chain of fetch strategies, short-circuiting on the first
    success. Pages that hide their content behind an interstitial go through
    the browser poller instead (``fetch_ready``).
    """

    def __init__(
        self,
        strategies: Sequence[FetchStrategy],
        poller: Optional[BrowserPoller] = None,
    ):
        if not strategies:
            raise ValueError("PageFetcher needs at least one fetch strategy")
        self.strategies: List[FetchStrategy] = list(strategies)
        self.poller = poller

    @classmethod
    def from_config(cls, config: Optional[FetcherConfig] = None) -> "PageFetcher":
        """
        Default chain: direct request, then the unblocking proxy.
        """
        config = config or FetcherConfig()
        return cls(
            strategies=[DirectFetchStrategy(config), SolverFetchStrategy(config)],
            poller=BrowserPoller(config),
        )

    def fetch(self, url: str) -> str:
        """
        Args:
            url: Page to retrieve

        Returns:
            Document text

        Raises:
            FetchFailed: With the last strategy's reason when all of them fail
        """
        last_reason = "no strategy attempted"
        for strategy in self.strategies:
            try:
                html = strategy.fetch(url)
            except FetchFailed as error:
                last_reason = error.reason
                logger.info(
                    "Fetch strategy '%s' failed for %s: %s",
                    strategy.name,
                    url,
                    error.reason,
                )
                continue

            logger.debug("Fetched %s via %s", url, strategy.name)
            return html

        raise FetchFailed(url, last_reason)

    def fetch_ready(self, url: str, selector: str) -> str:
        """
        Load the page in a browser and wait for ``selector`` to appear.

        Raises:
            TimeoutWaitingForContent: If the marker never shows up
            FetchFailed: If no browser poller is configured
        """
        if self.poller is None:
            raise FetchFailed(url, "no browser poller configured")
        return self.poller.fetch_when_ready(url, selector)

    def close(self) -> None:
        for strategy in self.strategies:
            strategy.close()
