# extractors/navigation/fetch_strategies.py
"""
Fetch strategies tried in order by the PageFetcher.

Each strategy returns the document text or raises ``FetchFailed`` with a
short reason, and each carries its own bounded timeout.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from configurations.settings_fetcher import FetcherConfig
from exceptions import FetchFailed

logger = logging.getLogger(__name__)


class FetchStrategy(ABC):
    """
    One way of turning a URL into HTML.
    """

    name = "strategy"

    @abstractmethod
    def fetch(self, url: str) -> str:
        """
        Raises:
            FetchFailed: If this strategy cannot produce the document
        """

    def close(self) -> None:
        session = getattr(self, "session", None)
        if session is not None:
            session.close()


class DirectFetchStrategy(FetchStrategy):
    """
    Plain GET with a browser user agent. Rejects blocked statuses and
    bot-check interstitials so the next strategy can take over.
    """

    name = "direct"

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or FetcherConfig()
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            }
        )

    def fetch(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.config.direct_timeout)
        except requests.RequestException as error:
            raise FetchFailed(url, f"direct request error: {error}") from error

        if response.status_code in self.config.fallback_statuses:
            raise FetchFailed(url, f"direct request blocked ({response.status_code})")

        if not response.ok:
            raise FetchFailed(url, f"direct request returned {response.status_code}")

        body = response.text
        marker = self._challenge_marker(body)
        if marker:
            raise FetchFailed(url, f"challenge page detected ('{marker}')")

        return body

    def _challenge_marker(self, body: str) -> Optional[str]:
        for marker in self.config.challenge_markers:
            if marker in body:
                return marker
        return None


class SolverFetchStrategy(FetchStrategy):
    """
    Delegates to a local unblocking proxy speaking the
    ``{cmd, url, maxTimeout}`` protocol.
    """

    name = "solver"

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or FetcherConfig()
        self.session = session or requests.Session()

    def is_available(self) -> bool:
        """
        Liveness check against the proxy root.
        """
        try:
            response = self.session.get(
                self.config.solver_health_endpoint,
                timeout=self.config.solver_health_timeout,
            )
        except requests.RequestException as error:
            logger.debug("Unblocking proxy not reachable: %s", error)
            return False
        return response.ok

    def fetch(self, url: str) -> str:
        if not self.is_available():
            raise FetchFailed(
                url, f"unblocking proxy not reachable at {self.config.solver_url}"
            )

        payload = {
            "cmd": "request.get",
            "url": url,
            "maxTimeout": self.config.solver_max_timeout_ms,
        }
        try:
            response = self.session.post(
                self.config.solver_endpoint,
                json=payload,
                timeout=self.config.solver_request_timeout,
            )
            envelope = response.json()
        except requests.RequestException as error:
            raise FetchFailed(url, f"unblocking proxy request error: {error}") from error
        except ValueError as error:
            raise FetchFailed(url, "unblocking proxy returned invalid JSON") from error

        if not isinstance(envelope, dict):
            raise FetchFailed(url, "unblocking proxy returned an unexpected payload")

        solution = envelope.get("solution") or {}
        document = solution.get("response") if isinstance(solution, dict) else None
        if envelope.get("status") != "ok" or not isinstance(document, str):
            raise FetchFailed(
                url,
                f"unblocking proxy failed: {envelope.get('message') or envelope.get('status')}",
            )

        return document
