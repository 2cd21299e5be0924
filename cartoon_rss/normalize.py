"""Deduplication and ordering of content items."""

from .models import ContentItem


def deduplicate(items: list[ContentItem]) -> list[ContentItem]:
    """Drop items whose URL was already seen, keeping the first occurrence."""
    seen = set()
    unique = []
    for item in items:
        if item.url in seen:
            continue
        seen.add(item.url)
        unique.append(item)
    return unique


def sort_by_date(items: list[ContentItem]) -> list[ContentItem]:
    """Newest first; items with equal dates keep their relative order."""
    return sorted(items, key=lambda item: item.published_at, reverse=True)


def normalize(items: list[ContentItem]) -> list[ContentItem]:
    """Deduplicate by URL, then order newest first."""
    return sort_by_date(deduplicate(items))
