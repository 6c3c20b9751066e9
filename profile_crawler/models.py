"""
Data model shared by the extraction, crawl and storage layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Item:
    """One image from a profile's media feed."""

    id: str
    src: str
    caption: str | None
    link: str
    likes: int
    created: str | None
    liked_by: tuple[str, ...] = ()
    commented_by: tuple[str, ...] = ()

    def actors(self) -> set[str]:
        """Every identifier that liked or commented on this item."""
        return set(self.liked_by) | set(self.commented_by)

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form written to ``images.json``."""
        return {
            "id": self.id,
            "src": self.src,
            "caption": self.caption,
            "link": self.link,
            "likes": self.likes,
            "created": self.created,
        }


@dataclass(frozen=True)
class SeedData:
    """Fields pulled out of a profile page's embedded data blob."""

    profile: dict[str, Any]
    raw_items: list[Any]


@dataclass(frozen=True)
class MediaPage:
    """A decoded batch of items plus the cursor for the next request."""

    items: list[Item]
    cursor: str | None
    has_more: bool = False


@dataclass(frozen=True)
class FetchResult:
    """Complete paginated retrieval of one identifier."""

    handle: str
    profile: dict[str, Any]
    items: list[Item] = field(default_factory=list)
    pages: int = 1


@dataclass
class CrawlOutcome:
    """Terminal state of one identifier within a generation."""

    handle: str
    ok: bool
    items: int = 0
    discovered: int = 0
    error: str | None = None


@dataclass
class GenerationResult:
    """Everything one worker-pool pass produced."""

    outcomes: list[CrawlOutcome] = field(default_factory=list)
    discovered: list[str] = field(default_factory=list)

    @property
    def failed(self) -> list[CrawlOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> list[CrawlOutcome]:
        return [o for o in self.outcomes if o.ok]


class TerminationReason(Enum):
    MAX_DEPTH = "reached max depth"
    QUEUE_EMPTY = "no more items in queue"


@dataclass
class CrawlReport:
    """Summary of a whole traversal run."""

    generations: list[GenerationResult] = field(default_factory=list)
    reason: TerminationReason | None = None

    @property
    def outcomes(self) -> list[CrawlOutcome]:
        return [o for gen in self.generations for o in gen.outcomes]

    @property
    def processed(self) -> list[str]:
        return [o.handle for o in self.outcomes]
