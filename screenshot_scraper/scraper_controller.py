"""
Main orchestrator for screenshot crawls.
Coordinates discovery and batched detail page extraction.
"""

import asyncio
import time
from typing import Awaitable, Callable, Iterable, List, Optional

import httpx

from .config import ScraperConfig
from .errors import FetchError, PrivateOrMissingProfile
from .logger import get_logger
from .models import (
    STATUS_ERROR,
    STATUS_OK,
    STATUS_PRIVATE_OR_MISSING,
    STATUS_PROFILE_UNAVAILABLE,
    CrawlResult,
    CrawlState,
    Found,
    ItemOutcome,
    MediaRecord,
)
from .resilience.content_discovery import ContentDiscovery
from .resilience.rate_limiter import RateLimiter
from .resilience.retry_handler import RetryHandler
from .steam_scraper import SteamScraper
from .utils import apply_quality, estimate_quality, id_to_url

logger = get_logger(__name__)


def apply_quality_to_records(records: Iterable[MediaRecord], quality: Optional[str]) -> List[MediaRecord]:
    """Rewrite image URLs in place for a requested quality."""
    records = list(records)
    if not quality:
        return records
    for record in records:
        record.image_url = apply_quality(record.image_url, quality)
        record.quality_estimate = estimate_quality(record.image_url)
    return records


class ScraperController:
    """Main orchestrator that coordinates all scraper components."""

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize controller with configuration.

        Args:
            config: ScraperConfig instance, uses defaults if None
            client: HTTP client shared by all fetches, created lazily if None
            sleep: Delay coroutine for pacing and backoff, asyncio.sleep if None
        """
        self.config = config or ScraperConfig()
        self.rate_limiter = RateLimiter(self.config.rate_limit, sleep=sleep)
        self.retry_handler = RetryHandler(self.config.retry, sleep=sleep)
        self.scraper = SteamScraper(self.config, client=client, retry_handler=self.retry_handler)
        self.discovery = ContentDiscovery(self.scraper, self.rate_limiter, self.config)

    async def close(self):
        await self.scraper.close()

    async def _scrape_into(self, url: str, state: CrawlState, found: List[MediaRecord]) -> ItemOutcome:
        """Scrape one detail page and record the outcome as soon as it settles."""
        outcome = await self.scraper.scrape_screenshot_page(url)
        state.record_outcome(outcome)
        if isinstance(outcome, Found):
            found.append(outcome.record)
        return outcome

    async def process_all(self, links: Iterable[str], state: CrawlState) -> List[MediaRecord]:
        """
        Fetch and extract detail pages in sequential batches.

        Members of a batch run concurrently; the next batch starts only after
        every member settled, with batch_delay in between. Each outcome is
        recorded on the state as soon as it settles, so a cancelled crawl keeps
        the items already finished in its current batch.

        Returns:
            Records found by this call, in completion order
        """
        urls = list(links)
        size = self.config.batch_size
        batches = [urls[i:i + size] for i in range(0, len(urls), size)]
        found: List[MediaRecord] = []

        for index, batch in enumerate(batches, start=1):
            logger.info("Processing batch %d/%d with %d screenshots", index, len(batches), len(batch))
            await asyncio.gather(*(self._scrape_into(url, state, found) for url in batch))

            if index < len(batches):
                await self.rate_limiter.pause(self.config.batch_delay)

        logger.info("Successfully processed %d out of %d screenshots", len(found), len(urls))
        return found

    async def crawl(self, steam_id: str, state: Optional[CrawlState] = None) -> CrawlResult:
        """
        Discover and extract every screenshot of a profile.

        Args:
            steam_id: Numeric Steam account id
            state: CrawlState to accumulate into; callers that may cancel the
                crawl pass their own to keep the partial records

        Returns:
            CrawlResult; never raises for upstream failures
        """
        state = state or CrawlState(steam_id=steam_id)
        started = time.monotonic()

        def result(status: str) -> CrawlResult:
            return CrawlResult.from_state(state, status, time.monotonic() - started)

        try:
            links = await self.discovery.collect_all_links(steam_id, state)
            await self.process_all(sorted(links), state)
        except PrivateOrMissingProfile as e:
            logger.error("%s", e)
            return result(STATUS_PRIVATE_OR_MISSING)
        except FetchError as e:
            logger.error("Failed to access profile: %s", e)
            return result(STATUS_PROFILE_UNAVAILABLE)
        except Exception:
            logger.exception("Error fetching screenshots for %s", steam_id)
            return result(STATUS_ERROR)

        return result(STATUS_OK)

    async def fetch_screenshot(self, item_id: str, quality: Optional[str] = None) -> Optional[MediaRecord]:
        """
        Extract a single screenshot by id.

        Returns:
            The record, or None when the page is missing or has no image
        """
        url = id_to_url(item_id, self.config.base_url)
        outcome = await self.scraper.scrape_screenshot_page(url)
        if not isinstance(outcome, Found):
            return None
        record = outcome.record
        # Bare CDN URLs get the maximum size set unless a quality was asked for
        record.image_url = apply_quality(record.image_url, quality)
        record.quality_estimate = estimate_quality(record.image_url)
        return record
