"""
Steam Community screenshot scraper.
Fetches listing and detail pages over a pooled async HTTP client and turns
detail pages into media records.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from .config import ScraperConfig
from .errors import FetchError
from .extraction import extract_media
from .logger import get_logger
from .models import (
    SKIP_ERROR,
    SKIP_FETCH_ERROR,
    SKIP_NO_MATCH,
    Found,
    ItemOutcome,
    MediaRecord,
    Skipped,
)
from .resilience.retry_handler import RetryHandler

logger = get_logger(__name__)


@dataclass
class FetchedPage:
    """A successfully fetched page."""
    url: str
    status: int
    body: str


class SteamScraper:
    """HTTP access to steamcommunity.com pages."""

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        retry_handler: Optional[RetryHandler] = None,
    ):
        """
        Args:
            config: ScraperConfig instance, uses defaults if None
            client: Pre-built client (tests pass one with a mock transport)
            retry_handler: RetryHandler for page fetches
        """
        self.config = config or ScraperConfig()
        self.retry_handler = retry_handler or RetryHandler(self.config.retry)
        self._client = client
        self._owns_client = client is None

    def get_client(self) -> httpx.AsyncClient:
        """Get or create persistent HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout, connect=10.0),
                follow_redirects=True,
                headers=self.config.headers,
                limits=httpx.Limits(
                    max_keepalive_connections=20,
                    max_connections=50,
                    keepalive_expiry=60.0,
                ),
                http2=True,
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this scraper created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "SteamScraper":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _get_once(self, url: str) -> FetchedPage:
        client = self.get_client()
        try:
            response = await client.get(url, headers=self.config.headers)
        except httpx.HTTPError as e:
            raise FetchError(url, cause=f"{type(e).__name__}: {e}") from e
        if not response.is_success:
            raise FetchError(url, status=response.status_code)
        return FetchedPage(url=url, status=response.status_code, body=response.text)

    async def fetch(self, url: str, retries: Optional[int] = None) -> FetchedPage:
        """
        GET a page, retrying with exponential backoff.

        Args:
            url: Absolute URL
            retries: Total attempts, RetryConfig.max_retries if None

        Returns:
            FetchedPage with status and body

        Raises:
            FetchError: Non-2xx status or network failure on every attempt
        """
        return await self.retry_handler.execute_with_retry(
            self._get_once, url, max_retries=retries, retry_on=(FetchError,)
        )

    async def exists(self, url: str) -> bool:
        """Lightweight HEAD check, no retries."""
        client = self.get_client()
        try:
            response = await client.head(url, headers={'User-Agent': self.config.headers.get('User-Agent', '')})
        except httpx.HTTPError as e:
            logger.debug("Probe failed for %s: %s", url, e)
            return False
        return response.is_success

    async def scrape_screenshot_page(self, url: str) -> ItemOutcome:
        """
        Fetch a detail page and extract its media record.

        Never raises: every failure becomes a Skipped outcome.
        """
        try:
            page = await self.fetch(url)
        except FetchError as e:
            logger.warning("Skipping %s - %s", url, e)
            return Skipped(url, SKIP_FETCH_ERROR, str(e))

        try:
            fragment = extract_media(page.body)
        except Exception as e:
            logger.exception("Error extracting image from %s", url)
            return Skipped(url, SKIP_ERROR, f"{type(e).__name__}: {e}")

        if fragment is None:
            logger.info("Failed to extract image URL from page: %s", url)
            return Skipped(url, SKIP_NO_MATCH)

        logger.debug("Found %s image via %s: %s", fragment.quality_estimate, fragment.strategy, fragment.image_url[:80])
        return Found(MediaRecord(
            page_url=url,
            image_url=fragment.image_url,
            title=fragment.title,
            game_name=fragment.game_name,
            quality_estimate=fragment.quality_estimate,
        ))
