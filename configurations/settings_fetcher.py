# configurations/settings_fetcher.py
"""
Settings for the page fetching layer: direct requests, the local
unblocking proxy and the polling browser.
"""

import os
from dataclasses import dataclass, field
from typing import List, Tuple

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class FetcherConfig:
    """
    Timeouts, markers and endpoints used by the fetch strategies.
    Every network call made with these settings is bounded.
    """

    user_agent: str = DEFAULT_USER_AGENT
    direct_timeout: float = 10.0
    challenge_markers: Tuple[str, ...] = (
        "running directly",
        "Just a moment...",
        "Enable JavaScript",
    )
    fallback_statuses: Tuple[int, ...] = (403, 503)

    # ***> Unblocking proxy <***
    solver_url: str = "http://127.0.0.1:8191"
    solver_health_timeout: float = 2.0
    solver_max_timeout_ms: int = 55000
    solver_request_timeout: float = 60.0

    # ***> Browser polling <***
    poll_interval: float = 2.0
    poll_attempts: int = 15
    page_load_timeout: int = 30
    headless: bool = True
    debug_dump_path: str = "debug_timeout.html"
    consent_keywords: List[str] = field(
        default_factory=lambda: ["agree", "accept", "consent"]
    )

    @classmethod
    def from_env(cls) -> "FetcherConfig":
        """
        Build a config with overrides taken from environment variables.
        """
        config = cls()
        config.user_agent = os.getenv("FETCH_USER_AGENT", config.user_agent)
        config.direct_timeout = float(
            os.getenv("FETCH_DIRECT_TIMEOUT", config.direct_timeout)
        )
        config.solver_url = os.getenv("SOLVER_URL", config.solver_url).rstrip("/")
        config.headless = os.getenv("BROWSER_HEADLESS", "true").lower() != "false"
        config.debug_dump_path = os.getenv("DEBUG_DUMP_PATH", config.debug_dump_path)
        return config

    @property
    def solver_endpoint(self) -> str:
        return f"{self.solver_url}/v1"

    @property
    def solver_health_endpoint(self) -> str:
        return f"{self.solver_url}/"
