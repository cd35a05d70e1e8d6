# exceptions/fetcher.py
"""
Exceptions raised by the page fetching layer.
"""

from typing import Optional


class FetchFailed(Exception):
    """
    Raised when no fetch strategy could return a usable document.

    Transport errors and unresolved challenge pages both end up here; the
    only distinction left to callers is the diagnostic ``reason``.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class TimeoutWaitingForContent(Exception):
    """
    Raised when a polled page never shows its marker element.
    """

    def __init__(
        self,
        url: str,
        selector: str,
        attempts: int,
        dump_path: Optional[str] = None,
    ):
        message = (
            f"Timed out waiting for '{selector}' on {url} after {attempts} attempts"
        )
        if dump_path:
            message += f" (last document saved to {dump_path})"
        super().__init__(message)
        self.url = url
        self.selector = selector
        self.attempts = attempts
        self.dump_path = dump_path
