"""Data models for the cartoon RSS generator."""

from dataclasses import dataclass
from datetime import date

from bs4 import Tag


@dataclass
class RawCandidate:
    """An image element matched by a selector, before metadata inference."""

    resolved_url: str
    element: Tag


@dataclass
class ContentItem:
    """Represents a single cartoon destined for a feed entry."""

    url: str
    title: str
    description: str
    published_at: date
    source_filename: str


@dataclass
class RunResult:
    """Summary of a completed run."""

    item_count: int
    latest_date: date
    oldest_date: date
    processing_time: float  # seconds
    feed_size_kb: float
    output_file: str
    used_fallback: bool = False


@dataclass(frozen=True)
class ChannelMeta:
    """Channel-level feed metadata, fixed for the duration of a run."""

    title: str
    link: str
    description: str
    language: str
    artist: str
    artist_url: str
    contact_email: str
    ttl: int
    generator: str
    image_url: str
    image_size: int
    categories: tuple[str, ...]
    item_categories: tuple[str, ...]
    keywords: str
    pages_url: str

    @property
    def self_link(self) -> str:
        return f"{self.pages_url}/feed.xml"

    @property
    def contact(self) -> str:
        """RSS-style ``email (name)`` contact line."""
        return f"{self.contact_email} ({self.artist})"
