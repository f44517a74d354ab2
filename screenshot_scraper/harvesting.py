"""
Link harvesting for screenshot listing pages.

Each matcher is an independent, named pure function returning candidate
screenshot ids found in the raw markup. Results from all matchers are
merged; a link found by any one of them counts.
"""

import re
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .utils import BASE_URL, id_to_url, is_numeric_id


PRIVATE_OR_MISSING_MARKERS = (
    "The specified profile is private",
    "This profile is private",
    "The specified profile could not be found",
)

_ANCHOR_DOUBLE = re.compile(
    r'href="(?:https://steamcommunity\.com)?/sharedfiles/filedetails/\?id=(\d+)[^"]*"',
    re.ASCII,
)
_ANCHOR_SINGLE = re.compile(
    r"href='(?:https://steamcommunity\.com)?/sharedfiles/filedetails/\?id=(\d+)[^']*'",
    re.ASCII,
)
_HOVER_CALLBACK = re.compile(r'SharedFileBindMouseHover\(\s*"(\d+)"', re.ASCII)
_THUMBNAIL_PATH = re.compile(r'src="https://steamuser(?:images|content)[^"]+/([0-9a-f]+)/"', re.ASCII)
_FILE_PATH = re.compile(r'href="[^"]*/file/(\d+)"', re.ASCII)
_DETAILS_PAGE_HANDLER = re.compile(r'"SharedFileDetailsPage"[^>]+href="([^"]+)"', re.ASCII)
_DATA_ATTRIBUTE = re.compile(r'data-screenshot-id="(\d+)"', re.ASCII)
_ONCLICK_HANDLER = re.compile(r'onclick="ViewScreenshot\(\'(\d+)\'\)"', re.ASCII)
_MODAL_CONTENT = re.compile(r"ShowModalContent\( 'shared_file_(\d+)'", re.ASCII)

_TOTAL_PATTERNS = (
    re.compile(r'(\d+) screenshots', re.IGNORECASE | re.ASCII),
    re.compile(r'(\d+) Screenshot', re.IGNORECASE | re.ASCII),
    re.compile(r'Screenshots \((\d+)\)', re.IGNORECASE | re.ASCII),
    re.compile(r'Showing (\d+) screenshots', re.IGNORECASE | re.ASCII),
)
_WALL_ROW = '<div class="imageWallRow">'


def _findall(pattern: "re.Pattern") -> Callable[[str], List[str]]:
    def matcher(html: str) -> List[str]:
        return pattern.findall(html)
    return matcher


def _details_page_handler(html: str) -> List[str]:
    ids = []
    for href in _DETAILS_PAGE_HANDLER.findall(html):
        match = re.search(r'[?&]id=(\d+)', href, re.ASCII)
        if match:
            ids.append(match.group(1))
    return ids


LINK_MATCHERS: List[Tuple[str, Callable[[str], Iterable[str]]]] = [
    ('anchor_double_quote', _findall(_ANCHOR_DOUBLE)),
    ('anchor_single_quote', _findall(_ANCHOR_SINGLE)),
    ('hover_callback', _findall(_HOVER_CALLBACK)),
    ('thumbnail_path', _findall(_THUMBNAIL_PATH)),
    ('file_path', _findall(_FILE_PATH)),
    ('details_page_handler', _details_page_handler),
    ('data_attribute', _findall(_DATA_ATTRIBUTE)),
    ('onclick_handler', _findall(_ONCLICK_HANDLER)),
    ('modal_content', _findall(_MODAL_CONTENT)),
]


def extract_links(html: str, base_url: str = BASE_URL) -> Set[str]:
    """
    Harvest canonical detail page URLs from a listing page.

    Args:
        html: Raw listing page markup
        base_url: Community site root used for canonical URLs

    Returns:
        Set of detail URLs, one per distinct numeric id
    """
    links: Set[str] = set()
    if not html:
        return links
    for _name, matcher in LINK_MATCHERS:
        for item_id in matcher(html):
            # Thumbnail segments are often content hashes, not ids
            if is_numeric_id(item_id):
                links.add(id_to_url(item_id, base_url))
    return links


def is_private_or_missing(html: str) -> bool:
    return any(marker in html for marker in PRIVATE_OR_MISSING_MARKERS)


def estimate_total_items(html: str) -> Optional[int]:
    """
    Best-effort guess at how many screenshots the profile has.

    Tries the known count phrases first, then falls back to counting
    thumbnail wall rows.

    Returns:
        Estimated total, or None when nothing usable was found
    """
    for pattern in _TOTAL_PATTERNS:
        match = pattern.search(html)
        if match:
            total = int(match.group(1))
            if total > 0:
                return total
    rows = html.count(_WALL_ROW)
    if rows:
        return rows * 10
    return None
