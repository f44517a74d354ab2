"""
Exceptions raised by the screenshot scraper.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for scraper failures."""


class FetchError(ScraperError):
    """A URL could not be fetched with a 2xx status after all retries."""

    def __init__(self, url: str, status: Optional[int] = None, cause: Optional[str] = None):
        self.url = url
        self.status = status
        self.cause = cause
        reason = f"status {status}" if status is not None else (cause or "unknown error")
        super().__init__(f"Failed to fetch {url}: {reason}")


class PrivateOrMissingProfile(ScraperError):
    """The profile page reports the profile as private or not found."""

    def __init__(self, steam_id: str):
        self.steam_id = steam_id
        super().__init__(f"Profile {steam_id} is private or does not exist")
