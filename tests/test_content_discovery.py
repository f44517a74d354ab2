"""content_discovery module tests."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import httpx
import pytest

from screenshot_scraper.errors import FetchError, PrivateOrMissingProfile
from screenshot_scraper.models import CrawlState
from screenshot_scraper.resilience.content_discovery import ContentDiscovery
from screenshot_scraper.resilience.rate_limiter import RateLimiter
from screenshot_scraper.resilience.retry_handler import RetryHandler
from screenshot_scraper.steam_scraper import SteamScraper
from screenshot_scraper.utils import id_to_url

from .conftest import PROFILE_PATH, STEAM_ID, listing_html, no_sleep


def make_discovery(fake_steam, config) -> ContentDiscovery:
    scraper = SteamScraper(config, client=fake_steam.client(), retry_handler=RetryHandler(config.retry, sleep=no_sleep))
    return ContentDiscovery(scraper, RateLimiter(config.rate_limit, sleep=no_sleep), config)


def listing_requests(fake_steam, variant_key: str = None) -> list:
    """(variant, page) pairs of listing page requests, in order."""
    seen = []
    for request in fake_steam.requests:
        params = dict(request.url.params)
        if request.url.path != PROFILE_PATH or "p" not in params:
            continue
        page = int(params.pop("p"))
        variant = "&".join(f"{k}={v}" for k, v in params.items())
        if variant_key is None or variant == variant_key:
            seen.append((variant, page))
    return seen


class TestPageCeiling:
    """Per-variant page limit."""

    def test_default_without_estimate(self, fake_steam, fast_config) -> None:
        discovery = make_discovery(fake_steam, replace(fast_config, min_pages=10))
        assert discovery.page_ceiling(None) == 10

    def test_from_estimate(self, fake_steam, fast_config) -> None:
        discovery = make_discovery(fake_steam, replace(fast_config, min_pages=10, page_margin=2))
        assert discovery.page_ceiling(600) == 22
        assert discovery.page_ceiling(30) == 10


class TestListingPage:
    """Listing URLs per view variant."""

    def test_default_variant(self, fake_steam, fast_config) -> None:
        listing = make_discovery(fake_steam, fast_config).listing_page(STEAM_ID, "", 3)
        assert listing.url == f"https://steamcommunity.com{PROFILE_PATH}?p=3"
        assert listing.page == 3

    def test_variant_query(self, fake_steam, fast_config) -> None:
        listing = make_discovery(fake_steam, fast_config).listing_page(STEAM_ID, "appid=0&sort=newestfirst", 1)
        assert listing.url == f"https://steamcommunity.com{PROFILE_PATH}?appid=0&sort=newestfirst&p=1"
        assert listing.variant == "appid=0&sort=newestfirst"


class TestCollectAllLinks:
    """Pagination across variants."""

    def test_private_profile_short_circuits(self, fake_steam, fast_config) -> None:
        fake_steam.profile_body = listing_html([1, 2]) + "<p>This profile is private.</p>"
        discovery = make_discovery(fake_steam, fast_config)

        with pytest.raises(PrivateOrMissingProfile):
            asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert listing_requests(fake_steam) == []

    def test_profile_fetch_failure_propagates(self, fake_steam, fast_config) -> None:
        fake_steam.profile_status = 500
        discovery = make_discovery(fake_steam, fast_config)

        with pytest.raises(FetchError):
            asyncio.run(discovery.collect_all_links(STEAM_ID))
        # two attempts with max_retries=2
        assert len(fake_steam.requests) == 2

    def test_merges_variants_without_duplicates(self, fake_steam, fast_config) -> None:
        fake_steam.profile_body = listing_html([1, 2])
        fake_steam.pages[("", 1)] = listing_html([1, 2, 3])
        fake_steam.pages[("", 2)] = listing_html([4, 5])
        fake_steam.pages[("sort=newestfirst", 1)] = listing_html([5, 6])
        discovery = make_discovery(fake_steam, fast_config)

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert links == {id_to_url(str(i)) for i in range(1, 7)}

    def test_stops_after_empty_run(self, fake_steam, fast_config) -> None:
        """Two consecutive pages without new links end the variant."""
        fake_steam.pages[("", 1)] = listing_html([1])
        fake_steam.pages[("", 2)] = listing_html([1])
        fake_steam.pages[("", 3)] = listing_html([2])
        fake_steam.pages[("", 4)] = listing_html([2])
        fake_steam.pages[("", 5)] = listing_html([2])
        state = CrawlState(steam_id=STEAM_ID)
        discovery = make_discovery(fake_steam, replace(fast_config, min_pages=10))

        asyncio.run(discovery.collect_all_links(STEAM_ID, state))
        assert listing_requests(fake_steam, "") == [("", 1), ("", 2), ("", 3), ("", 4), ("", 5)]
        assert state.pages_visited[""] == 5
        assert state.empty_runs[""] == 2

    def test_threshold_one_stops_on_first_empty_page(self, fake_steam, fast_config) -> None:
        fake_steam.pages[("", 1)] = listing_html([1])
        fake_steam.pages[("", 2)] = listing_html([])
        fake_steam.pages[("", 3)] = listing_html([3])
        discovery = make_discovery(fake_steam, replace(fast_config, empty_page_threshold=1))

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert listing_requests(fake_steam, "") == [("", 1), ("", 2)]
        assert id_to_url("3") not in links

    def test_first_page_overlap_not_counted_as_empty(self, fake_steam, fast_config) -> None:
        """Page 1 repeats the profile page, so threshold 1 still reaches page 2."""
        fake_steam.profile_body = listing_html([1, 2])
        fake_steam.pages[("", 1)] = listing_html([1, 2])
        fake_steam.pages[("", 2)] = listing_html([3, 4])
        config = replace(fast_config, view_variants=("",), empty_page_threshold=1)
        discovery = make_discovery(fake_steam, config)

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert links == {id_to_url(str(i)) for i in range(1, 5)}
        assert listing_requests(fake_steam) == [("", 1), ("", 2), ("", 3)]

    def test_respects_page_ceiling(self, fake_steam, fast_config) -> None:
        for page in range(1, 20):
            fake_steam.pages[("", page)] = listing_html([page])
        discovery = make_discovery(fake_steam, replace(fast_config, view_variants=("",), min_pages=4))

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert len(listing_requests(fake_steam)) == 4
        assert len(links) == 4

    def test_failed_listing_page_counts_as_empty(self, fake_steam, fast_config) -> None:
        fake_steam.pages[("", 1)] = listing_html([1])

        original = fake_steam.handler

        def failing(request):
            if dict(request.url.params).get("p") == "2":
                fake_steam.requests.append(request)
                return httpx.Response(503)
            return original(request)

        fake_steam.handler = failing
        discovery = make_discovery(fake_steam, replace(fast_config, view_variants=("",)))

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert links == {id_to_url("1")}
        assert [page for _, page in listing_requests(fake_steam)] == [1, 2, 2, 3]


class TestProbeIdRange:
    """Best-effort id range probing."""

    def test_probe_adds_hits(self, fake_steam, fast_config) -> None:
        fake_steam.pages[("", 1)] = listing_html([1000, 1350])
        fake_steam.head_ok = {"1100", "1300"}
        config = replace(fast_config, view_variants=("",), probe_id_range=True)
        discovery = make_discovery(fake_steam, config)

        links = asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert links == {id_to_url(str(i)) for i in (1000, 1100, 1300, 1350)}
        probed = [dict(r.url.params)["id"] for r in fake_steam.requests if r.method == "HEAD"]
        assert probed == ["1100", "1200", "1300"]

    def test_probe_skipped_for_wide_range(self, fake_steam, fast_config) -> None:
        fake_steam.pages[("", 1)] = listing_html([1, 50000])
        config = replace(fast_config, view_variants=("",), probe_id_range=True)
        discovery = make_discovery(fake_steam, config)

        asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert not [r for r in fake_steam.requests if r.method == "HEAD"]

    def test_probe_off_by_default(self, fake_steam, fast_config) -> None:
        fake_steam.pages[("", 1)] = listing_html([1000, 1350])
        discovery = make_discovery(fake_steam, replace(fast_config, view_variants=("",)))

        asyncio.run(discovery.collect_all_links(STEAM_ID))
        assert not [r for r in fake_steam.requests if r.method == "HEAD"]
