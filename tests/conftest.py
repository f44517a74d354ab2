"""pytest shared fixtures."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

import httpx
import pytest

from screenshot_scraper.config import RateLimitConfig, RetryConfig, ScraperConfig

STEAM_ID = "76561198000000001"
PROFILE_PATH = f"/profiles/{STEAM_ID}/screenshots"
CDN = "https://steamuserimages-a.akamaihd.net/ugc"


def listing_html(ids: Iterable[int], extra: str = "") -> str:
    """Listing page with one anchor per id."""
    anchors = "\n".join(
        f'<a href="https://steamcommunity.com/sharedfiles/filedetails/?id={i}" class="profile_media_item">'
        for i in ids
    )
    return f"<html><body>{extra}<div class=\"imageWall\">{anchors}</div></body></html>"


def detail_html(item_id: int, title: Optional[str] = "A screenshot", game: Optional[str] = "Portal 2") -> str:
    """Detail page whose og:image carries a sized CDN URL."""
    parts = [
        "<html><head>",
        f'<meta property="og:image" content="{CDN}/{item_id}/ABCDEF/?imw=637&imh=358">',
        "</head><body>",
    ]
    if title:
        parts.append(f'<div class="screenshotName">  {title}  </div>')
    if game:
        parts.append(f'<div class="screenshotAppName">{game}</div>')
    parts.append("</body></html>")
    return "".join(parts)


class FakeSteam:
    """Routes requests for a mock transport and records what was asked for."""

    def __init__(self):
        self.listings: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.profile_body = listing_html([])
        self.profile_status = 200
        self.pages: Dict[tuple, str] = {}
        self.details: Dict[str, str] = {}
        self.detail_status: Dict[str, int] = {}
        self.head_ok: set = set()
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = dict(request.url.params)

        if request.method == "HEAD":
            item_id = params.get("id", "")
            return httpx.Response(200 if item_id in self.head_ok else 404)

        if path == PROFILE_PATH:
            if "p" not in params:
                return httpx.Response(self.profile_status, text=self.profile_body)
            page = int(params.pop("p"))
            variant = "&".join(f"{k}={v}" for k, v in params.items())
            return httpx.Response(200, text=self.pages.get((variant, page), listing_html([])))

        if path == "/sharedfiles/filedetails/":
            item_id = params.get("id", "")
            status = self.detail_status.get(item_id, 200)
            if status != 200:
                return httpx.Response(status, text="error")
            body = self.details.get(item_id)
            if body is None:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, text=body)

        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def fake_steam() -> FakeSteam:
    return FakeSteam()


@pytest.fixture
def fast_config() -> ScraperConfig:
    """Config with every delay disabled and a short variant list."""
    return ScraperConfig(
        rate_limit=RateLimitConfig(min_delay=0.0, initial_delay=0.0, jitter_percent=0.0),
        retry=RetryConfig(max_retries=2, base_delay=0.0),
        view_variants=("", "sort=newestfirst"),
        batch_delay=0.0,
        probe_delay=0.0,
        min_pages=5,
    )
