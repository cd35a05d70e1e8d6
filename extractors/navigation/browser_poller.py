# extractors/navigation/browser_poller.py
"""
Headless browser loading for pages whose content appears only after an
interstitial has cleared.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By

from configurations.settings_fetcher import FetcherConfig
from exceptions import FetchFailed, TimeoutWaitingForContent

logger = logging.getLogger(__name__)


def build_chrome_driver(config: FetcherConfig) -> webdriver.Chrome:
    """Start Chrome with automation fingerprints toned down."""
    options = Options()
    if config.headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_argument("--window-size=1920,1080")
    options.add_argument(f"--user-agent={config.user_agent}")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])

    driver = webdriver.Chrome(options=options)
    driver.set_page_load_timeout(config.page_load_timeout)
    return driver


class BrowserPoller:
    """
    Polls a loaded page for a marker element at a fixed interval, up to a
    bounded number of attempts.
    """

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        driver_factory: Optional[Callable[[FetcherConfig], webdriver.Chrome]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or FetcherConfig()
        self.driver_factory = driver_factory or build_chrome_driver
        self.sleep = sleep

    def fetch_when_ready(self, url: str, selector: str) -> str:
        """
        Args:
            url: Page to load
            selector: CSS selector whose presence means the content is ready

        Returns:
            The rendered page source

        Raises:
            FetchFailed: If the browser cannot be started or navigation fails
            TimeoutWaitingForContent: If the selector never appears; the last
                document is written to the diagnostic dump first
        """
        try:
            driver = self.driver_factory(self.config)
        except WebDriverException as error:
            raise FetchFailed(url, f"browser unavailable: {error.msg}") from error

        try:
            try:
                driver.get(url)
            except TimeoutException:
                logger.info("Page load timed out for %s, polling anyway", url)
            except WebDriverException as error:
                raise FetchFailed(url, f"browser navigation failed: {error.msg}") from error

            self._accept_cookies(driver)

            for attempt in range(1, self.config.poll_attempts + 1):
                self.sleep(self.config.poll_interval)
                if driver.find_elements(By.CSS_SELECTOR, selector):
                    logger.debug("'%s' ready on %s after %d polls", selector, url, attempt)
                    return driver.page_source
                logger.debug(
                    "Waiting for '%s' on %s (%d/%d)",
                    selector,
                    url,
                    attempt,
                    self.config.poll_attempts,
                )

            dump_path = self._dump(driver.page_source)
            raise TimeoutWaitingForContent(
                url, selector, self.config.poll_attempts, dump_path
            )
        finally:
            driver.quit()

    def _accept_cookies(self, driver: webdriver.Chrome) -> None:
        """
        Click the first consent button found; a missing banner is normal.
        """
        try:
            for button in driver.find_elements(By.TAG_NAME, "button"):
                label = (button.text or "").lower()
                if any(keyword in label for keyword in self.config.consent_keywords):
                    button.click()
                    logger.debug("Dismissed consent banner ('%s')", label)
                    return
        except WebDriverException as error:
            logger.debug("Consent banner click failed: %s", error.msg)

    def _dump(self, page_source: str) -> Optional[str]:
        path = Path(self.config.debug_dump_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(page_source or "", encoding="utf-8")
        except OSError as error:
            logger.error("Could not write diagnostic dump %s: %s", path, error)
            return None
        logger.warning("Saved last observed document to %s", path)
        return str(path)
