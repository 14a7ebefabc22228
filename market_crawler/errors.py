"""
Exceptions raised by the crawler.

Only ConfigError is fatal for a run. Everything else is caught at the
item or entry-point level and counted.
"""

from typing import Optional


class CrawlerError(Exception):
    """Base class for crawler errors."""


class ConfigError(CrawlerError):
    """Missing or invalid configuration (credentials, mode, marketplace)."""


class SupabaseError(CrawlerError):
    """The datastore rejected a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class NavigationError(CrawlerError):
    """A page could not be loaded (HTTP error, bot challenge, redirect away)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason
