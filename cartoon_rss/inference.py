"""Title, description and date inference for candidate images."""

import posixpath
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from urllib.parse import unquote, urlparse

from bs4 import Tag

from .logging_config import create_execution_logger
from .models import ContentItem, RawCandidate

DEFAULT_TITLE = "Educational Cartoon"
GENERIC_TITLE = "cartoon"
PATH_MARKER = "wp-content"
MIN_YEAR = 2000

DESCRIPTION_TEMPLATE = (
    "Educational cartoon by {artist} featuring {title}. Making complex "
    "scientific and mathematical concepts accessible through visual humor "
    "and clever illustrations."
)

Extract = Callable[[Tag], str | None]
Accept = Callable[[str], bool]


def first_accepted(
    element: Tag,
    chain: Iterable[tuple[Extract, Accept]],
    transform: Callable[[str], str] | None = None,
) -> str | None:
    """Return the first extracted value its predicate accepts.

    Each link of the chain is an ``(extract, accept)`` pair. Empty extractions
    are skipped. If ``transform`` is given, it is applied to accepted values
    and a transform that yields an empty string moves on to the next link.
    """
    for extract, accept in chain:
        value = extract(element)
        if not value or not accept(value):
            continue
        if transform is None:
            return value
        value = transform(value)
        if value:
            return value
    return None


# -- element helpers -------------------------------------------------------

def _text(tag: Tag | None) -> str:
    if tag is None:
        return ""
    return tag.get_text(" ", strip=True)


def _attr(name: str) -> Extract:
    def extract(element: Tag) -> str | None:
        value = element.get(name)
        return value.strip() if isinstance(value, str) else None

    return extract


def _has_class(name: str) -> Callable[[Tag], bool]:
    return lambda tag: name in (tag.get("class") or [])


def _is_post(tag: Tag) -> bool:
    return tag.name == "article" or "post" in (tag.get("class") or [])


def _sibling_caption(element: Tag) -> str:
    return _text(element.find_next_sibling("figcaption"))


def _parent_sibling_caption_text(element: Tag) -> str:
    if element.parent is None:
        return ""
    return _text(element.parent.find_next_sibling(class_="wp-caption-text"))


def _figure_caption(element: Tag) -> str:
    figure = element.find_parent("figure")
    return _text(figure.find("figcaption")) if figure else ""


def _block_image_caption(element: Tag) -> str:
    block = element.find_parent(_has_class("wp-block-image"))
    return _text(block.find("figcaption")) if block else ""


def _wp_caption_text(element: Tag) -> str:
    wrapper = element.find_parent(_has_class("wp-caption"))
    return _text(wrapper.find(class_="wp-caption-text")) if wrapper else ""


def _post_heading(element: Tag) -> str:
    post = element.find_parent(_is_post)
    return _text(post.find(["h1", "h2", "h3"])) if post else ""


def _post_paragraph(element: Tag) -> str:
    post = element.find_parent(_is_post)
    return _text(post.find("p")) if post else ""


# -- acceptance and cleaning -----------------------------------------------

def accept_title(candidate: str) -> bool:
    """Check whether a raw title candidate is worth keeping."""
    return (
        3 < len(candidate) < 100
        and candidate.lower() != GENERIC_TITLE
        and not candidate.isdigit()
        and PATH_MARKER not in candidate
    )


def accept_description(candidate: str) -> bool:
    """Check whether a raw description candidate is worth keeping."""
    return (
        10 < len(candidate) < 500
        and "image" not in candidate.lower()
        and PATH_MARKER not in candidate
    )


def clean_title(title: str) -> str:
    """Normalize whitespace, drop unusual characters and cap the length."""
    title = re.sub(r"[^\w\s\-.,!?]", "", title)
    title = re.sub(r"\s+", " ", title)
    title = title.strip()[:80].strip()
    # Cleaning can strip a candidate below the minimum title length
    return title if len(title) > 3 else ""


def truncate_description(text: str, limit: int = 200) -> str:
    """Cut a description to ``limit`` characters with a trailing ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def filename_from_url(url: str) -> str:
    """Get the base filename of a URL path."""
    return posixpath.basename(unquote(urlparse(url).path))


def generate_title_from_url(url: str | None) -> str:
    """Build a readable title from an image filename.

    ``quantum-mechanics.jpg`` becomes ``Quantum Mechanics`` and
    ``538piethagoras.jpg`` becomes ``Piethagoras``.
    """
    if not url:
        return DEFAULT_TITLE

    filename = filename_from_url(url).split(".")[0]

    title = re.sub(r"^\d+", "", filename)
    title = re.sub(r"[_-]", " ", title)
    title = re.sub(r"([a-z])([A-Z])", r"\1 \2", title)
    title = re.sub(r"\s+", " ", title).strip()
    title = re.sub(r"\b(\w)", lambda match: match.group(1).upper(), title)
    title = title[:50].strip()

    return title if len(title) > 3 else DEFAULT_TITLE


# -- dates -------------------------------------------------------------------

@dataclass(frozen=True)
class DatePattern:
    """A date regex, how to read its groups, and how precise it is."""

    regex: re.Pattern
    format: str  # ymd, ym, y or yyyymmdd
    specificity: int


_DATE_PATTERNS = [
    DatePattern(re.compile(r"/(\d{4})/(\d{2})/(\d{2})/"), "ymd", 3),
    DatePattern(re.compile(r"/(\d{4})/(\d{2})/"), "ym", 2),
    DatePattern(re.compile(r"/(\d{4})(\d{2})(\d{2})(?:_|-|\.)?"), "ymd", 3),
    DatePattern(re.compile(r"(\d{4})-(\d{2})-(\d{2})"), "ymd", 3),
    DatePattern(re.compile(r"(\d{4})_(\d{2})_(\d{2})"), "ymd", 3),
    DatePattern(re.compile(r"(\d{8})(?!\d)"), "yyyymmdd", 3),
    DatePattern(re.compile(r"/(\d{4})/"), "y", 1),
]

# Most specific first; sorted() keeps declaration order within a rank.
DATE_PATTERNS = sorted(_DATE_PATTERNS, key=lambda p: p.specificity, reverse=True)


def _parse_match(match: re.Match, fmt: str) -> tuple[int, int, int]:
    if fmt == "ymd":
        return int(match.group(1)), int(match.group(2)), int(match.group(3))
    if fmt == "ym":
        return int(match.group(1)), int(match.group(2)), 1
    if fmt == "y":
        return int(match.group(1)), 1, 1
    if fmt == "yyyymmdd":
        token = match.group(1)
        return int(token[:4]), int(token[4:6]), int(token[6:8])
    raise ValueError(f"Unknown date format tag: {fmt}")


def _valid_date(year: int, month: int, day: int, today: date) -> date | None:
    try:
        parsed = date(year, month, day)
    except ValueError:
        return None
    if not MIN_YEAR <= parsed.year <= today.year + 1:
        return None
    return parsed


def match_date(url: str, today: date) -> date | None:
    """Return the first valid date found in a URL, most specific pattern first."""
    for pattern in DATE_PATTERNS:
        match = pattern.regex.search(url)
        if not match:
            continue
        found = _valid_date(*_parse_match(match, pattern.format), today=today)
        if found is not None:
            return found
    return None


# -- inferencer --------------------------------------------------------------

TITLE_CHAIN: list[tuple[Extract, Accept]] = [
    (_attr("alt"), accept_title),
    (_attr("title"), accept_title),
    (_sibling_caption, accept_title),
    (_parent_sibling_caption_text, accept_title),
    (_figure_caption, accept_title),
    (_block_image_caption, accept_title),
    (_wp_caption_text, accept_title),
    (_post_heading, accept_title),
]

DESCRIPTION_CHAIN: list[tuple[Extract, Accept]] = [
    (_sibling_caption, accept_description),
    (_figure_caption, accept_description),
    (_block_image_caption, accept_description),
    (_attr("title"), accept_description),
    (_parent_sibling_caption_text, accept_description),
    (_wp_caption_text, accept_description),
    (_post_paragraph, accept_description),
]


class MetadataInferencer:
    """Derives a ContentItem from a raw candidate image."""

    def __init__(
        self,
        artist: str = "Evert Kwok",
        today: date | None = None,
        execution_id: str | None = None,
    ):
        """Initialize the inferencer.

        Args:
            artist: Name used in synthesized descriptions
            today: Processing date used when a URL carries no usable date
            execution_id: Execution ID for logging context
        """
        self.artist = artist
        self.today = today
        self.logger = create_execution_logger("inferencer", execution_id)

    def infer(self, candidate: RawCandidate) -> ContentItem:
        """Build a ContentItem from a candidate."""
        url = candidate.resolved_url
        title = self.extract_title(candidate.element)
        item = ContentItem(
            url=url,
            title=title,
            description=self.extract_description(candidate.element, title),
            published_at=self.extract_date(url),
            source_filename=filename_from_url(url),
        )
        self.logger.info(
            f"Found: {item.title} - {item.published_at.isoformat()}",
            url=url,
            item_title=item.title,
        )
        return item

    def extract_title(self, element: Tag) -> str:
        """First accepted title candidate, else one derived from the filename."""
        title = first_accepted(element, TITLE_CHAIN, transform=clean_title)
        if title:
            return title
        return generate_title_from_url(element.get("src"))

    def extract_description(self, element: Tag, title: str | None = None) -> str:
        """Pick the first accepted caption or text, else synthesize one from the title.

        Args:
            element: Image element the description belongs to
            title: Already inferred title (inferred again when omitted)

        Returns:
            Description text, truncated to 200 characters plus an ellipsis
        """
        description = first_accepted(element, DESCRIPTION_CHAIN)
        if description:
            return truncate_description(description)

        if title is None:
            title = self.extract_title(element)
        return DESCRIPTION_TEMPLATE.format(artist=self.artist, title=title.lower())

    def extract_date(self, url: str) -> date:
        """Read the publication date from the URL, or use today when none is valid."""
        today = self.today or date.today()
        found = match_date(url, today)
        if found is not None:
            self.logger.debug(f"Extracted date {found.isoformat()} from {url}", url=url)
            return found

        self.logger.warning(
            f"Could not extract date from {url}, using current date", url=url
        )
        return today
