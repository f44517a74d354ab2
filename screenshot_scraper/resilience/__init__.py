"""
Resilience components for the screenshot scraper.
"""

from .rate_limiter import RateLimiter
from .retry_handler import RetryHandler
from .content_discovery import ContentDiscovery

__all__ = [
    'RateLimiter',
    'RetryHandler',
    'ContentDiscovery'
]
