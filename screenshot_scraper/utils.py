"""
Shared utility functions for the scraper.
"""

import re
from typing import Optional


BASE_URL = "https://steamcommunity.com"
DETAIL_PATH = "/sharedfiles/filedetails/"

# Substrings identifying the CDN hosts that honour image sizing parameters
IMAGE_HOSTS = ("steamuserimages", "steamusercontent")

SIZE_PARAMS = "imw={w}&imh={h}&ima=fit&impolicy=Letterbox"
MAX_SIZE_PARAMS = SIZE_PARAMS.format(w=5000, h=5000)

QUALITY_SIZES = {
    'high': (1920, 1080),
    'medium': (1280, 720),
    'low': (854, 480),
}
QUALITY_CHOICES = ('original', 'high', 'medium', 'low')


def id_to_url(item_id: str, base_url: str = BASE_URL) -> str:
    """
    Convert a screenshot id to its canonical detail page URL.

    Args:
        item_id: Numeric screenshot id (e.g., 2876543210)
        base_url: Community site root

    Returns:
        Detail URL (e.g., https://steamcommunity.com/sharedfiles/filedetails/?id=2876543210)
    """
    return f"{base_url.rstrip('/')}{DETAIL_PATH}?id={item_id}"


def extract_id_from_url(url: str) -> Optional[int]:
    """
    Extract the numeric screenshot id from a detail page URL.

    Returns:
        The id, or None if the URL carries no numeric id parameter
    """
    match = re.search(r'[?&]id=(\d+)(?:&|$)', url, re.ASCII)
    if not match:
        return None
    return int(match.group(1))


def profile_screenshots_url(steam_id: str, base_url: str = BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/profiles/{steam_id}/screenshots"


def is_numeric_id(value: Optional[str]) -> bool:
    """True for a non-empty string of ASCII digits."""
    return bool(value) and value.isascii() and value.isdigit()


def strip_query(url: str) -> str:
    return url.split('?', 1)[0]


def is_image_host(url: str) -> bool:
    """Check whether the URL points at a CDN that accepts sizing parameters."""
    base = strip_query(url)
    return any(host in base for host in IMAGE_HOSTS)


def normalize_image_url(url: str) -> str:
    """
    Drop sizing parameters from a matched image URL.

    URLs without a query string are returned untouched. On a known image
    host the maximum-size parameter set is re-appended so the CDN serves the
    original resolution instead of a thumbnail.
    """
    if '?' not in url:
        return url
    base = strip_query(url)
    if is_image_host(base):
        return f"{base}?{MAX_SIZE_PARAMS}"
    return base


def apply_quality(url: str, quality: Optional[str]) -> str:
    """
    Rewrite an image URL for the requested quality.

    Args:
        url: Image URL as extracted
        quality: One of original/high/medium/low; anything else means maximum

    Returns:
        URL carrying exactly the parameter set for the quality, or the
        unchanged URL when the host does not support sizing
    """
    if not is_image_host(url):
        return url
    base = strip_query(url)
    if quality == 'original':
        return base
    size = QUALITY_SIZES.get(quality or '')
    if size is None:
        return f"{base}?{MAX_SIZE_PARAMS}"
    return f"{base}?{SIZE_PARAMS.format(w=size[0], h=size[1])}"


def estimate_quality(url: str) -> str:
    """Label the likely resolution from path markers or the requested width."""
    match = re.search(r'[?&]imw=(\d+)', url, re.ASCII)
    width = int(match.group(1)) if match else 0
    if 'original' in url or '5000' in url or '3840x2160' in url or width >= 3840:
        return 'Ultra High Quality'
    if '2560x1440' in url or width >= 2560:
        return 'Very High Quality'
    if '1920x1080' in url or width >= 1920:
        return 'High Quality'
    return 'Standard Quality'


def resolution_area(url: str) -> int:
    """Pixel area encoded in a URL as WIDTHxHEIGHT, or 0."""
    match = re.search(r'(\d+)x(\d+)', url, re.ASCII)
    if not match:
        return 0
    return int(match.group(1)) * int(match.group(2))
