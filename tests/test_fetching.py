"""
Tests for the fetch strategies, the strategy chain and the polling browser.
All transports are mocked; nothing here touches the network.
"""

from unittest.mock import MagicMock

import pytest
import requests
from selenium.common.exceptions import WebDriverException

from configurations import FetcherConfig
from exceptions import FetchFailed, TimeoutWaitingForContent
from extractors.navigation.browser_poller import BrowserPoller
from extractors.navigation.fetch_strategies import (
    DirectFetchStrategy,
    FetchStrategy,
    SolverFetchStrategy,
)
from extractors.navigation.page_fetcher import PageFetcher

URL = "https://fbref.com/en/comps/9/Premier-League-Stats"


def response(status=200, text="", payload=None):
    mock = MagicMock()
    mock.status_code = status
    mock.ok = 200 <= status < 300
    mock.text = text
    mock.json.return_value = payload
    return mock


class TestDirectFetchStrategy:
    def test_returns_body_on_success(self):
        session = MagicMock()
        session.get.return_value = response(text="<html>table</html>")

        html = DirectFetchStrategy(FetcherConfig(), session).fetch(URL)

        assert html == "<html>table</html>"
        session.get.assert_called_once_with(URL, timeout=10.0)

    @pytest.mark.parametrize("status", [403, 503])
    def test_blocked_status_falls_through(self, status):
        session = MagicMock()
        session.get.return_value = response(status=status, text="blocked")

        with pytest.raises(FetchFailed, match="blocked"):
            DirectFetchStrategy(FetcherConfig(), session).fetch(URL)

    def test_other_error_status_falls_through(self):
        session = MagicMock()
        session.get.return_value = response(status=500)

        with pytest.raises(FetchFailed, match="500"):
            DirectFetchStrategy(FetcherConfig(), session).fetch(URL)

    def test_challenge_page_is_rejected(self):
        session = MagicMock()
        session.get.return_value = response(text="<title>Just a moment...</title>")

        with pytest.raises(FetchFailed, match="challenge"):
            DirectFetchStrategy(FetcherConfig(), session).fetch(URL)

    def test_transport_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(FetchFailed) as excinfo:
            DirectFetchStrategy(FetcherConfig(), session).fetch(URL)
        assert excinfo.value.url == URL


class TestSolverFetchStrategy:
    def test_posts_protocol_payload(self):
        session = MagicMock()
        session.get.return_value = response()
        session.post.return_value = response(
            payload={
                "status": "ok",
                "message": "",
                "solution": {"url": URL, "status": 200, "response": "<html>ok</html>"},
            }
        )

        html = SolverFetchStrategy(FetcherConfig(), session).fetch(URL)

        assert html == "<html>ok</html>"
        session.post.assert_called_once_with(
            "http://127.0.0.1:8191/v1",
            json={"cmd": "request.get", "url": URL, "maxTimeout": 55000},
            timeout=60.0,
        )

    def test_unreachable_proxy_is_not_posted_to(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")

        strategy = SolverFetchStrategy(FetcherConfig(), session)

        assert not strategy.is_available()
        with pytest.raises(FetchFailed, match="not reachable"):
            strategy.fetch(URL)
        session.post.assert_not_called()

    def test_error_status_surfaces_message(self):
        session = MagicMock()
        session.get.return_value = response()
        session.post.return_value = response(
            payload={"status": "error", "message": "Challenge not solved"}
        )

        with pytest.raises(FetchFailed, match="Challenge not solved"):
            SolverFetchStrategy(FetcherConfig(), session).fetch(URL)

    def test_invalid_json(self):
        session = MagicMock()
        session.get.return_value = response()
        session.post.return_value.json.side_effect = ValueError("not json")

        with pytest.raises(FetchFailed, match="invalid JSON"):
            SolverFetchStrategy(FetcherConfig(), session).fetch(URL)


class StubStrategy(FetchStrategy):
    def __init__(self, name, result=None, reason=None):
        self.name = name
        self.result = result
        self.reason = reason
        self.calls = 0

    def fetch(self, url):
        self.calls += 1
        if self.reason:
            raise FetchFailed(url, self.reason)
        return self.result


class TestPageFetcher:
    def test_first_success_short_circuits(self):
        direct = StubStrategy("direct", result="<html>direct</html>")
        solver = StubStrategy("solver", result="<html>solver</html>")

        assert PageFetcher([direct, solver]).fetch(URL) == "<html>direct</html>"
        assert solver.calls == 0

    def test_falls_back_in_order(self):
        direct = StubStrategy("direct", reason="direct request blocked (403)")
        solver = StubStrategy("solver", result="<html>solver</html>")

        assert PageFetcher([direct, solver]).fetch(URL) == "<html>solver</html>"
        assert direct.calls == 1

    def test_all_failing_reports_last_reason(self):
        fetcher = PageFetcher(
            [
                StubStrategy("direct", reason="direct request blocked (403)"),
                StubStrategy("solver", reason="unblocking proxy not reachable"),
            ]
        )

        with pytest.raises(FetchFailed) as excinfo:
            fetcher.fetch(URL)
        assert excinfo.value.reason == "unblocking proxy not reachable"

    def test_requires_a_strategy(self):
        with pytest.raises(ValueError):
            PageFetcher([])

    def test_fetch_ready_without_poller(self):
        fetcher = PageFetcher([StubStrategy("direct", result="x")])
        with pytest.raises(FetchFailed, match="no browser poller"):
            fetcher.fetch_ready(URL, ".scorebox")

    def test_fetch_ready_delegates_to_poller(self):
        poller = MagicMock()
        poller.fetch_when_ready.return_value = "<html>ready</html>"
        fetcher = PageFetcher([StubStrategy("direct", result="x")], poller)

        assert fetcher.fetch_ready(URL, ".scorebox") == "<html>ready</html>"
        poller.fetch_when_ready.assert_called_once_with(URL, ".scorebox")

    def test_close_releases_strategy_sessions(self):
        session = MagicMock()
        fetcher = PageFetcher(
            [DirectFetchStrategy(FetcherConfig(), session), StubStrategy("stub")]
        )

        fetcher.close()

        session.close.assert_called_once()


def fake_driver(ready_on_poll=None, page_source="<html>page</html>"):
    """
    Driver whose marker lookup succeeds on the given poll (never if None).
    """
    driver = MagicMock()
    driver.page_source = page_source
    polls = {"count": 0}

    def find_elements(by, value):
        if value == "button":
            return []
        polls["count"] += 1
        if ready_on_poll is not None and polls["count"] >= ready_on_poll:
            return [MagicMock()]
        return []

    driver.find_elements.side_effect = find_elements
    return driver


class TestBrowserPoller:
    def config(self, tmp_path, attempts=5):
        return FetcherConfig(
            poll_interval=2.0,
            poll_attempts=attempts,
            debug_dump_path=str(tmp_path / "debug_timeout.html"),
        )

    def test_returns_source_once_marker_appears(self, tmp_path, recording_sleep):
        driver = fake_driver(ready_on_poll=3)
        poller = BrowserPoller(
            self.config(tmp_path), driver_factory=lambda config: driver, sleep=recording_sleep
        )

        html = poller.fetch_when_ready(URL, ".scorebox")

        assert html == "<html>page</html>"
        assert recording_sleep.calls == [2.0, 2.0, 2.0]
        driver.get.assert_called_once_with(URL)
        driver.quit.assert_called_once()

    def test_timeout_dumps_last_document(self, tmp_path, recording_sleep):
        driver = fake_driver(ready_on_poll=None, page_source="<html>interstitial</html>")
        config = self.config(tmp_path, attempts=3)
        poller = BrowserPoller(config, driver_factory=lambda c: driver, sleep=recording_sleep)

        with pytest.raises(TimeoutWaitingForContent) as excinfo:
            poller.fetch_when_ready(URL, ".scorebox")

        assert excinfo.value.attempts == 3
        assert excinfo.value.dump_path == config.debug_dump_path
        assert (tmp_path / "debug_timeout.html").read_text(encoding="utf-8") == (
            "<html>interstitial</html>"
        )
        assert len(recording_sleep.calls) == 3
        driver.quit.assert_called_once()

    def test_consent_button_is_clicked(self, tmp_path, recording_sleep):
        driver = fake_driver(ready_on_poll=1)
        button = MagicMock()
        button.text = "I Agree"
        original = driver.find_elements.side_effect

        def find_elements(by, value):
            if value == "button":
                return [button]
            return original(by, value)

        driver.find_elements.side_effect = find_elements
        poller = BrowserPoller(
            self.config(tmp_path), driver_factory=lambda c: driver, sleep=recording_sleep
        )

        poller.fetch_when_ready(URL, ".scorebox")

        button.click.assert_called_once()

    def test_browser_start_failure(self, tmp_path, recording_sleep):
        def broken_factory(config):
            raise WebDriverException("chrome not found")

        poller = BrowserPoller(
            self.config(tmp_path), driver_factory=broken_factory, sleep=recording_sleep
        )

        with pytest.raises(FetchFailed, match="browser unavailable"):
            poller.fetch_when_ready(URL, ".scorebox")
