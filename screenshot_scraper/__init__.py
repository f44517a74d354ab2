"""
Steam Community screenshot scraper.
"""

from .config import RateLimitConfig, RetryConfig, ScraperConfig
from .errors import FetchError, PrivateOrMissingProfile, ScraperError
from .models import CrawlResult, CrawlState, MediaRecord
from .scraper_controller import ScraperController

__all__ = [
    'RateLimitConfig',
    'RetryConfig',
    'ScraperConfig',
    'FetchError',
    'PrivateOrMissingProfile',
    'ScraperError',
    'CrawlResult',
    'CrawlState',
    'MediaRecord',
    'ScraperController',
]
