"""
Configuration dataclasses for the screenshot scraper.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


DEFAULT_HEADERS: Dict[str, str] = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml',
    'Accept-Language': 'en-US,en;q=0.9',
    'Cache-Control': 'no-cache',
}

# Query-string combinations that surface different subsets of the same listing.
# The empty string is the default view.
DEFAULT_VIEW_VARIANTS: Tuple[str, ...] = (
    "",
    "tab=all",
    "tab=public",
    "appid=0",
    "sort=newestfirst",
    "sort=oldestfirst",
    "sort=mostrecent",
    "view=grid",
    "view=list",
    "appid=0&sort=newestfirst",
    "appid=0&sort=oldestfirst",
    "browsefilter=myfiles",
)


@dataclass
class RateLimitConfig:
    """Configuration for pacing listing and probe requests."""
    min_delay: float = 1.0
    max_delay: float = 30.0
    initial_delay: float = 1.0
    backoff_factor: float = 1.5
    jitter_percent: float = 0.2
    cooldown_threshold: int = 5
    cooldown_duration: float = 60.0


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0


@dataclass
class ScraperConfig:
    """Main configuration for a screenshot crawl."""
    base_url: str = "https://steamcommunity.com"
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    request_timeout: float = 30.0

    # Rate limiting
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)

    # Retry settings
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Pagination
    view_variants: Tuple[str, ...] = DEFAULT_VIEW_VARIANTS
    empty_page_threshold: int = 2
    items_per_page: int = 30
    page_margin: int = 2
    min_pages: int = 10

    # Batching
    batch_size: int = 3
    batch_delay: float = 2.0

    # ID range probing (best effort, off by default)
    probe_id_range: bool = False
    probe_stride: int = 100
    probe_max_span: int = 10000
    probe_delay: float = 0.5

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.empty_page_threshold < 1:
            raise ValueError("empty_page_threshold must be at least 1")
        if self.probe_stride < 1:
            raise ValueError("probe_stride must be at least 1")
