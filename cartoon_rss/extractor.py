"""Candidate image extraction from the cartoon archive page."""

from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .logging_config import create_execution_logger
from .models import RawCandidate

UPLOADS_MARKER = "wp-content/uploads"

# Tried in order; matches from every selector are pooled.
SELECTORS = [
    'img[src*="wp-content/uploads"]',
    ".wp-block-image img",
    ".entry-content img",
    ".post-content img",
    "article img",
    ".content img",
    ".cartoon-image img",
    "figure img",
    ".gallery img",
    ".wp-caption img",
]

# Site furniture rather than cartoons
EXCLUDE_PATTERNS = [
    "thumbnail",
    "thumb",
    "avatar",
    "logo",
    "icon",
    "banner",
    "header",
    "footer",
    "sidebar",
    "-150x150",
    "-300x300",
    "wp-content/themes",
    "wp-content/plugins",
]


def is_valid_content_url(url: str) -> bool:
    """Check that an image URL does not match any deny-list pattern."""
    url_lower = url.lower()
    return not any(pattern in url_lower for pattern in EXCLUDE_PATTERNS)


def parse_html(html: str | bytes) -> BeautifulSoup:
    """Parse page markup with the stdlib-backed BeautifulSoup parser."""
    return BeautifulSoup(html, "html.parser")


class CandidateExtractor:
    """Finds image elements that plausibly represent cartoons."""

    def __init__(
        self,
        selectors: list[str] | None = None,
        execution_id: str | None = None,
    ):
        """Initialize CandidateExtractor.

        Args:
            selectors: CSS selectors to pool, in order (defaults to SELECTORS)
            execution_id: Execution ID for logging context
        """
        self.selectors = selectors or SELECTORS
        self.logger = create_execution_logger("extractor", execution_id)

    def extract(
        self, document: str | bytes | BeautifulSoup, base_url: str
    ) -> list[RawCandidate]:
        """Collect unique content images from a page.

        Args:
            document: Page HTML, or an already parsed document
            base_url: URL the page was fetched from, for resolving relative paths

        Returns:
            Candidates in selector order, then document order
        """
        soup = document if isinstance(document, BeautifulSoup) else parse_html(document)

        self.logger.info(
            f"Searching for images with {len(self.selectors)} different selectors",
            selector_count=len(self.selectors),
        )

        candidates = []
        found_urls = set()

        for selector in self.selectors:
            for element in soup.select(selector):
                src = element.get("src")
                if not src or UPLOADS_MARKER not in src:
                    continue

                full_url = urljoin(base_url, src.strip())
                if full_url in found_urls:
                    continue

                if not is_valid_content_url(full_url):
                    self.logger.debug(
                        f"Skipping non-cartoon image: {full_url}", url=full_url
                    )
                    continue

                found_urls.add(full_url)
                candidates.append(RawCandidate(resolved_url=full_url, element=element))

        self.logger.info(
            f"Found {len(candidates)} candidate images", candidate_count=len(candidates)
        )
        return candidates
