from .browser_poller import BrowserPoller, build_chrome_driver
from .fetch_strategies import DirectFetchStrategy, FetchStrategy, SolverFetchStrategy
from .navigation_config import NavigationConfig
from .page_fetcher import PageFetcher
from .url_parser import URLParser

__all__ = [
    "NavigationConfig",
    "URLParser",
    "FetchStrategy",
    "DirectFetchStrategy",
    "SolverFetchStrategy",
    "BrowserPoller",
    "build_chrome_driver",
    "PageFetcher",
]
