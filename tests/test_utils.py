"""utils module tests."""

from __future__ import annotations

import pytest

from screenshot_scraper.utils import (
    MAX_SIZE_PARAMS,
    apply_quality,
    estimate_quality,
    extract_id_from_url,
    id_to_url,
    is_image_host,
    is_numeric_id,
    normalize_image_url,
    profile_screenshots_url,
)

from .conftest import CDN

IMAGE = f"{CDN}/1234/ABCD/"


class TestUrls:
    """Detail and profile URL helpers."""

    def test_id_to_url(self) -> None:
        assert id_to_url("42") == "https://steamcommunity.com/sharedfiles/filedetails/?id=42"

    def test_extract_id(self) -> None:
        assert extract_id_from_url(id_to_url("987")) == 987
        assert extract_id_from_url("https://steamcommunity.com/sharedfiles/filedetails/?id=5&x=1") == 5

    def test_extract_id_missing(self) -> None:
        assert extract_id_from_url("https://steamcommunity.com/sharedfiles/filedetails/") is None
        assert extract_id_from_url("https://example.com/?id=abc") is None

    def test_extract_id_ascii_only(self) -> None:
        assert extract_id_from_url("https://steamcommunity.com/sharedfiles/filedetails/?id=\u0661\u0662") is None

    @pytest.mark.parametrize("value, expected", [
        ("76561198000000000", True),
        ("", False),
        (None, False),
        ("12a", False),
        ("\u0661\u0662\u0663", False),
        ("\u00b2", False),
    ])
    def test_is_numeric_id(self, value, expected) -> None:
        assert is_numeric_id(value) is expected

    def test_profile_url(self) -> None:
        assert profile_screenshots_url("7656") == "https://steamcommunity.com/profiles/7656/screenshots"


class TestImageUrls:
    """Sizing parameter handling."""

    def test_image_host(self) -> None:
        assert is_image_host(IMAGE)
        assert is_image_host("https://images.steamusercontent.com/ugc/1/2/")
        assert not is_image_host("https://cdn.example.com/a.jpg?src=steamuserimages")

    def test_normalize_replaces_params_on_image_host(self) -> None:
        assert normalize_image_url(f"{IMAGE}?imw=200&imh=100") == f"{IMAGE}?{MAX_SIZE_PARAMS}"

    def test_normalize_strips_params_elsewhere(self) -> None:
        assert normalize_image_url("https://cdn.example.com/a.jpg?w=5") == "https://cdn.example.com/a.jpg"

    def test_normalize_leaves_bare_url(self) -> None:
        assert normalize_image_url(IMAGE) == IMAGE


class TestApplyQuality:
    """Quality rewriting."""

    def test_medium_replaces_stale_params(self) -> None:
        url = f"{IMAGE}?imw=5000&imh=5000&ima=fit&impolicy=Letterbox"
        assert apply_quality(url, "medium") == f"{IMAGE}?imw=1280&imh=720&ima=fit&impolicy=Letterbox"

    @pytest.mark.parametrize("quality, expected", [
        ("original", IMAGE),
        ("high", f"{IMAGE}?imw=1920&imh=1080&ima=fit&impolicy=Letterbox"),
        ("low", f"{IMAGE}?imw=854&imh=480&ima=fit&impolicy=Letterbox"),
        ("ultra", f"{IMAGE}?{MAX_SIZE_PARAMS}"),
        (None, f"{IMAGE}?{MAX_SIZE_PARAMS}"),
    ])
    def test_quality_levels(self, quality, expected) -> None:
        assert apply_quality(f"{IMAGE}?imw=10", quality) == expected

    def test_other_hosts_untouched(self) -> None:
        url = "https://cdn.example.com/a.jpg?w=5"
        assert apply_quality(url, "low") == url


class TestEstimateQuality:
    """Quality labels."""

    @pytest.mark.parametrize("url, label", [
        (f"{IMAGE}?{MAX_SIZE_PARAMS}", "Ultra High Quality"),
        (f"{CDN}/3840x2160/a.jpg", "Ultra High Quality"),
        (f"{CDN}/2560x1440/a.jpg", "Very High Quality"),
        (f"{CDN}/1920x1080/a.jpg", "High Quality"),
        (f"{IMAGE}?imw=1920&imh=1080&ima=fit&impolicy=Letterbox", "High Quality"),
        (f"{IMAGE}?imw=1280&imh=720&ima=fit&impolicy=Letterbox", "Standard Quality"),
    ])
    def test_labels(self, url, label) -> None:
        assert estimate_quality(url) == label
