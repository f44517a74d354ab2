"""
Content discovery for finding every screenshot of a profile.
Handles pagination across view variants and optional id range probing.
"""

import math
from typing import List, Optional, Set, TYPE_CHECKING
from urllib.parse import urlencode, parse_qsl

from ..config import ScraperConfig
from ..errors import FetchError, PrivateOrMissingProfile
from ..harvesting import estimate_total_items, extract_links, is_private_or_missing
from ..logger import get_logger
from ..models import CrawlState, ListingPage
from ..utils import extract_id_from_url, id_to_url, profile_screenshots_url
from .rate_limiter import RateLimiter

if TYPE_CHECKING:
    from ..steam_scraper import SteamScraper

logger = get_logger(__name__)


class ContentDiscovery:
    """Discovers all screenshot detail URLs of a profile."""

    def __init__(
        self,
        scraper: "SteamScraper",
        rate_limiter: Optional[RateLimiter] = None,
        config: Optional[ScraperConfig] = None,
    ):
        """
        Initialize with scraper for page fetching.

        Args:
            scraper: SteamScraper instance
            rate_limiter: Pacing for listing and probe requests
            config: ScraperConfig, the scraper's config if None
        """
        self.scraper = scraper
        self.config = config or scraper.config
        self.rate_limiter = rate_limiter or RateLimiter(self.config.rate_limit)

    def page_ceiling(self, estimated_total: Optional[int]) -> int:
        """
        Maximum number of pages to visit per view variant.

        Args:
            estimated_total: Screenshot count guessed from the first page
        """
        if not estimated_total:
            return self.config.min_pages
        pages = math.ceil(estimated_total / self.config.items_per_page) + self.config.page_margin
        return max(self.config.min_pages, pages)

    def listing_page(self, steam_id: str, variant: str, page: int) -> ListingPage:
        params = parse_qsl(variant)
        params.append(('p', str(page)))
        url = f"{profile_screenshots_url(steam_id, self.config.base_url)}?{urlencode(params)}"
        return ListingPage(url=url, page=page, variant=variant)

    async def fetch_profile(self, steam_id: str, state: CrawlState) -> str:
        """
        Fetch the first profile page and check it is accessible.

        Returns:
            The profile page markup

        Raises:
            FetchError: The profile page could not be fetched
            PrivateOrMissingProfile: The page reports a private or unknown profile
        """
        url = profile_screenshots_url(steam_id, self.config.base_url)
        await self.rate_limiter.wait()
        try:
            page = await self.scraper.fetch(url)
        except FetchError:
            self.rate_limiter.record_failure()
            raise
        self.rate_limiter.record_success()

        if is_private_or_missing(page.body):
            raise PrivateOrMissingProfile(steam_id)

        state.estimated_total = estimate_total_items(page.body)
        if state.estimated_total:
            logger.info("Profile appears to have approximately %d screenshots", state.estimated_total)
        else:
            logger.info("Couldn't detect screenshot count, using default page ceiling")

        new = state.add_links(extract_links(page.body, self.config.base_url))
        logger.info("Found %d screenshots on profile page", new)
        return page.body

    async def _harvest_page(self, listing: ListingPage, state: CrawlState) -> int:
        """Fetch one listing page and merge its links; 0 when the fetch failed."""
        await self.rate_limiter.wait()
        try:
            page = await self.scraper.fetch(listing.url)
        except FetchError as e:
            self.rate_limiter.record_failure()
            logger.warning("Error fetching page %s: %s", listing.url, e)
            return 0
        self.rate_limiter.record_success()
        return state.add_links(extract_links(page.body, self.config.base_url))

    async def paginate_variant(self, steam_id: str, variant: str, max_page: int, state: CrawlState) -> int:
        """
        Page through one view variant until the empty-page run threshold.

        Returns:
            Number of new links this variant contributed
        """
        label = variant or 'default'
        state.empty_runs[variant] = 0
        state.pages_visited[variant] = 0
        found = 0

        for page in range(1, max_page + 1):
            listing = self.listing_page(steam_id, variant, page)
            new = await self._harvest_page(listing, state)
            state.pages_visited[variant] += 1
            found += new
            logger.info("Found %d new screenshots on %s", new, listing.url)

            # Page 1 repeats the profile page already harvested
            if new == 0 and page > 1:
                state.empty_runs[variant] += 1
                if state.empty_runs[variant] >= self.config.empty_page_threshold:
                    logger.info(
                        "%d empty pages in a row, leaving view '%s'",
                        state.empty_runs[variant], label,
                    )
                    break
            elif new:
                state.empty_runs[variant] = 0

        return found

    async def probe_id_range(self, state: CrawlState) -> int:
        """
        Sample ids between the lowest and highest known ids.

        Only runs when the span is below probe_max_span; a hit is added to
        the link set. Probe errors are ignored.

        Returns:
            Number of links added by probing
        """
        ids: List[int] = [i for i in (extract_id_from_url(u) for u in state.links) if i is not None]
        if not ids:
            return 0

        min_id, max_id = min(ids), max(ids)
        logger.info("Found ID range from %d to %d", min_id, max_id)
        if max_id - min_id >= self.config.probe_max_span:
            logger.info("ID range too wide to probe")
            return 0

        known: Set[int] = set(ids)
        added = 0
        for item_id in range(min_id, max_id + 1, self.config.probe_stride):
            if item_id in known:
                continue
            url = id_to_url(str(item_id), self.config.base_url)
            if await self.scraper.exists(url):
                added += state.add_links([url])
                logger.info("Found additional screenshot with ID %d", item_id)
            await self.rate_limiter.pause(self.config.probe_delay)
        return added

    async def collect_all_links(self, steam_id: str, state: Optional[CrawlState] = None) -> Set[str]:
        """
        Discover all screenshot detail URLs for a profile.

        Args:
            steam_id: Numeric Steam account id
            state: CrawlState to accumulate into, a fresh one if None

        Returns:
            The deduplicated set of detail URLs

        Raises:
            FetchError: The profile page itself could not be fetched
            PrivateOrMissingProfile: The profile is private or unknown
        """
        state = state or CrawlState(steam_id=steam_id)
        logger.info("Fetching screenshot listings for Steam ID: %s", steam_id)

        await self.fetch_profile(steam_id, state)
        max_page = self.page_ceiling(state.estimated_total)
        logger.info("Will check up to %d pages per view", max_page)

        for variant in self.config.view_variants:
            logger.info("Trying view type: %s", variant or 'default')
            await self.paginate_variant(steam_id, variant, max_page, state)

        if self.config.probe_id_range:
            await self.probe_id_range(state)

        logger.info("Found %d total unique screenshot pages", len(state.links))
        return state.links
