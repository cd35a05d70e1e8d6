# pipelines/crawl_orchestrator/base_orchestrator.py
"""
Base orchestrator class with common functionality.
Provides shared initialization and the politeness policy.
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from configurations import AppConfig, ConfigFactory
from database.services.database_service import FootballDatabaseService
from extractors.navigation.page_fetcher import PageFetcher

from .orchestrator_utils import OrchestratorUtils

logger = logging.getLogger(__name__)


class BaseOrchestrator(ABC):
    """
    Abstract base class for orchestrator implementations.

    Network, storage, sleep and randomness are all injected so traversal
    logic can run against fakes.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        database: FootballDatabaseService,
        config: Optional[AppConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            fetcher: Page fetcher used for every navigation
            database: Storage facade
            config: Application configuration (uses development if None)
            sleep: Sleep function used for polite delays
            rng: Random source for delay jitter
        """
        self.config = config or ConfigFactory.development()
        self.crawler_config = self.config.crawler
        self.fetcher = fetcher
        self.database = database
        self.sleep = sleep
        self.rng = rng or random.Random()
        self._navigations = 0

    def _before_navigation(self) -> None:
        """
        Apply the polite delay before every navigation except the first.
        """
        if self._navigations:
            delay = OrchestratorUtils.polite_delay(
                self.sleep, self.rng, self.crawler_config.delay_range
            )
            logger.debug("Polite delay %.1fs", delay)
        self._navigations += 1

    def _fetch(self, url: str) -> str:
        self._before_navigation()
        return self.fetcher.fetch(url)

    def cleanup(self) -> None:
        """
        Release HTTP sessions and storage resources.
        """
        self.fetcher.close()
        self.database.cleanup()

    @abstractmethod
    def crawl_league(self, league_url: str):
        """
        Full traversal starting at a league page.
        """
