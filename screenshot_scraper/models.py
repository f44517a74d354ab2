"""
Data models for the screenshot scraper.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Union


@dataclass(frozen=True)
class ListingPage:
    """One page of a profile's screenshot listing under a view variant."""
    url: str
    page: int
    variant: str = ""


@dataclass
class MediaFragment:
    """What a detail page yielded, before it is tied to its page URL."""
    image_url: str
    strategy: str
    title: Optional[str] = None
    game_name: Optional[str] = None
    quality_estimate: Optional[str] = None


@dataclass
class MediaRecord:
    """A screenshot detail page and its best direct image URL."""
    page_url: str
    image_url: str
    title: Optional[str] = None
    game_name: Optional[str] = None
    quality_estimate: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize using the API's field names."""
        return {
            'pageUrl': self.page_url,
            'imageUrl': self.image_url,
            'title': self.title,
            'gameName': self.game_name,
            'qualityEstimate': self.quality_estimate,
        }


@dataclass(frozen=True)
class Found:
    """Per-link outcome: a record was extracted."""
    record: MediaRecord


@dataclass(frozen=True)
class Skipped:
    """Per-link outcome: the link contributed nothing."""
    page_url: str
    reason: str
    detail: str = ""


ItemOutcome = Union[Found, Skipped]

SKIP_FETCH_ERROR = "fetch_error"
SKIP_NO_MATCH = "no_match"
SKIP_ERROR = "error"


@dataclass
class CrawlState:
    """Mutable context for a single crawl; never shared between crawls."""
    steam_id: str
    links: Set[str] = field(default_factory=set)
    empty_runs: Dict[str, int] = field(default_factory=dict)
    pages_visited: Dict[str, int] = field(default_factory=dict)
    records: List[MediaRecord] = field(default_factory=list)
    outcomes: List[ItemOutcome] = field(default_factory=list)
    estimated_total: Optional[int] = None

    def add_links(self, links) -> int:
        """
        Merge harvested links into the dedup set.

        Returns:
            Number of links that were not already known
        """
        before = len(self.links)
        self.links.update(links)
        return len(self.links) - before

    def record_outcome(self, outcome: ItemOutcome):
        self.outcomes.append(outcome)
        if isinstance(outcome, Found):
            self.records.append(outcome.record)

    def skipped_counts(self) -> Dict[str, int]:
        return dict(Counter(o.reason for o in self.outcomes if isinstance(o, Skipped)))


STATUS_OK = "ok"
STATUS_PRIVATE_OR_MISSING = "private_or_missing"
STATUS_PROFILE_UNAVAILABLE = "profile_unavailable"
STATUS_TIMEOUT = "timeout"
STATUS_ERROR = "error"


@dataclass
class CrawlResult:
    """Result of a profile crawl."""
    steam_id: str
    status: str
    records: List[MediaRecord] = field(default_factory=list)
    links_discovered: int = 0
    skipped: Dict[str, int] = field(default_factory=dict)
    duration_seconds: float = 0.0

    @classmethod
    def from_state(cls, state: CrawlState, status: str, duration_seconds: float = 0.0) -> "CrawlResult":
        return cls(
            steam_id=state.steam_id,
            status=status,
            records=list(state.records),
            links_discovered=len(state.links),
            skipped=state.skipped_counts(),
            duration_seconds=duration_seconds,
        )

    @property
    def success(self) -> bool:
        return bool(self.records)
