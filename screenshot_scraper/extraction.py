"""
Image extraction for screenshot detail pages.

Strategies are tried strictly in order: earlier ones are known to point at
the original-resolution file, later ones are progressively looser guesses.
"""

import re
from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup

from .models import MediaFragment
from .utils import (
    MAX_SIZE_PARAMS,
    estimate_quality,
    normalize_image_url,
    resolution_area,
    strip_query,
)


HIGH_RES_MARKERS = ('/1920x1080/', '/2560x1440/', '/3840x2160/', '_original')

_ACTUAL_MEDIA = re.compile(r'<img[^>]+id="ActualMedia"[^>]+src="([^"]+)"')
_SCRIPT_IMAGE = re.compile(r'ScreenshotImage[^"]+"([^"]+)"')
_CLOUDFRONT_JPG = re.compile(r'(https://[^"]+\.cloudfront\.net/[^"]+\.jpg)')
_DETAILS_IMAGE = re.compile(r'<img[^>]+class="screenshotDetailsImage"[^>]+src="([^"]+)"')
_CDN_JPG = re.compile(r'src="(https://steamuser(?:images|content)[^"]+\.jpg[^"]*)"')


def _og_image(html: str, soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find('meta', property='og:image')
    if tag and tag.get('content'):
        return tag['content']
    return None


def _image_src(html: str, soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find('link', rel='image_src')
    if tag and tag.get('href'):
        return tag['href']
    return None


def _actual_media(html: str, soup: BeautifulSoup) -> Optional[str]:
    match = _ACTUAL_MEDIA.search(html)
    if not match:
        return None
    url = match.group(1)
    if '?' not in url:
        url = f"{url}?{MAX_SIZE_PARAMS}"
    return url


def _script_variable(html: str, soup: BeautifulSoup) -> Optional[str]:
    match = _SCRIPT_IMAGE.search(html)
    if match:
        return match.group(1)
    match = _CLOUDFRONT_JPG.search(html)
    if match:
        return match.group(1)
    return None


def _details_image_class(html: str, soup: BeautifulSoup) -> Optional[str]:
    match = _DETAILS_IMAGE.search(html)
    if match:
        return strip_query(match.group(1))
    return None


def _generic_image_scan(html: str, soup: BeautifulSoup) -> Optional[str]:
    """Pick the highest resolution CDN jpg referenced by the page."""
    candidates = []
    for raw in _CDN_JPG.findall(html):
        url = strip_query(raw)
        if any(marker in url for marker in HIGH_RES_MARKERS):
            return url
        candidates.append(url)
    if not candidates:
        return None
    # sorted() is stable, so equal areas keep document order
    return sorted(candidates, key=resolution_area, reverse=True)[0]


EXTRACTION_STRATEGIES: List[Tuple[str, Callable[[str, BeautifulSoup], Optional[str]]]] = [
    ('og_image', _og_image),
    ('image_src', _image_src),
    ('actual_media', _actual_media),
    ('script_variable', _script_variable),
    ('details_image_class', _details_image_class),
    ('generic_image_scan', _generic_image_scan),
]


def _div_text(soup: BeautifulSoup, css_class: str) -> Optional[str]:
    div = soup.find('div', class_=css_class)
    if div is None:
        return None
    text = div.get_text(strip=True)
    return text or None


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    return _div_text(soup, 'screenshotName')


def extract_game_name(soup: BeautifulSoup) -> Optional[str]:
    return _div_text(soup, 'screenshotAppName')


def extract_media(html: str) -> Optional[MediaFragment]:
    """
    Find the best direct image URL on a detail page.

    Args:
        html: Raw detail page markup

    Returns:
        MediaFragment with image URL, strategy name, title, game name and
        quality estimate, or None when no strategy matched
    """
    if not html:
        return None

    soup = BeautifulSoup(html, 'html.parser')

    for name, strategy in EXTRACTION_STRATEGIES:
        image_url = strategy(html, soup)
        if image_url:
            image_url = normalize_image_url(image_url)
            return MediaFragment(
                image_url=image_url,
                strategy=name,
                title=extract_title(soup),
                game_name=extract_game_name(soup),
                quality_estimate=estimate_quality(image_url),
            )
    return None
