"""Configuration management for the cartoon RSS generator."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .models import ChannelMeta

DEFAULT_REPO_URL = "https://github.com/yourusername/evert-kwok-rss"
DEFAULT_PAGES_URL = "https://yourusername.github.io/evert-kwok-rss"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("text", "json")


@dataclass
class FetchConfig:
    """Configuration for downloading the source page."""

    url: str = "https://www.evertkwok.nl/cartoon/"
    timeout: int = 15
    max_retries: int = 3
    retry_delay: float = 2.0
    user_agent: str = (
        f"Mozilla/5.0 (compatible; EvertKwokRSSBot/1.0; +{DEFAULT_REPO_URL})"
    )

    def headers(self) -> dict[str, str]:
        """Browser-like request headers sent with every fetch."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "nl-NL,nl;q=0.9,en;q=0.8",
            "Accept-Encoding": "gzip, deflate",
            "Cache-Control": "no-cache",
        }


@dataclass
class FeedConfig:
    """Channel-level metadata for the rendered feed."""

    title: str = "Evert Kwok Educational Cartoons"
    link: str = "https://www.evertkwok.nl/cartoon/"
    description: str = (
        "Latest educational cartoons by Evert Kwok - Mathematical and scientific "
        "concepts explained through humor and visual storytelling. "
        "Automatically updated daily."
    )
    language: str = "nl-NL"
    artist: str = "Evert Kwok"
    artist_url: str = "https://www.evertkwok.nl"
    contact_email: str = "info@evertkwok.nl"
    ttl: int = 1440
    generator: str = "Evert Kwok Cartoon Scraper v2.0 (GitHub Actions)"
    image_url: str = (
        "https://www.evertkwok.nl/wp-content/uploads/2019/07/"
        "cropped-Evert-Kwok-favicon-32x32.png"
    )
    image_size: int = 32
    categories: list[str] = field(
        default_factory=lambda: [
            "Education",
            "Science",
            "Mathematics",
            "Cartoons",
            "Dutch Content",
        ]
    )
    item_categories: list[str] = field(
        default_factory=lambda: [
            "Education",
            "Cartoons",
            "Science",
            "Mathematics",
            "Humor",
            "Visual Learning",
        ]
    )
    keywords: str = "education, cartoon, science, mathematics, humor, evert kwok"
    pages_url: str = DEFAULT_PAGES_URL

    @property
    def self_link(self) -> str:
        return f"{self.pages_url}/feed.xml"

    def channel_meta(self) -> ChannelMeta:
        """Snapshot this configuration as immutable channel metadata."""
        return ChannelMeta(
            title=self.title,
            link=self.link,
            description=self.description,
            language=self.language,
            artist=self.artist,
            artist_url=self.artist_url,
            contact_email=self.contact_email,
            ttl=self.ttl,
            generator=self.generator,
            image_url=self.image_url,
            image_size=self.image_size,
            categories=tuple(self.categories),
            item_categories=tuple(self.item_categories),
            keywords=self.keywords,
            pages_url=self.pages_url,
        )


@dataclass
class RunConfig:
    """Per-invocation settings taken from the CLI and environment."""

    output_file: str = os.path.join("docs", "feed.xml")
    verbose: bool = False
    ci: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    github_output: str | None = None


def derive_repo_url(repository: str | None) -> str:
    """Get the GitHub repository URL for an ``owner/name`` identifier."""
    if repository and repository.strip():
        return f"https://github.com/{repository.strip()}"
    return DEFAULT_REPO_URL


def derive_pages_url(repository: str | None, pages_url: str | None) -> str:
    """Get the public GitHub Pages base URL hosting the feed.

    An explicit pages URL wins; otherwise ``owner/name`` maps to
    ``https://owner.github.io/name``.
    """
    if pages_url and pages_url.strip():
        return pages_url.strip().rstrip("/")

    if repository and "/" in repository:
        owner, _, name = repository.strip().partition("/")
        if owner and name:
            return f"https://{owner.lower()}.github.io/{name}"

    return DEFAULT_PAGES_URL


class Config:
    """Main configuration bundle passed into a run."""

    def __init__(
        self,
        fetch: FetchConfig | None = None,
        feed: FeedConfig | None = None,
        run: RunConfig | None = None,
        repository: str | None = None,
    ):
        """Initialize configuration from explicit parts."""
        self.fetch = fetch or FetchConfig()
        self.feed = feed or FeedConfig()
        self.run = run or RunConfig()
        self.repository = repository

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        output_file: str | None = None,
        verbose: bool = False,
    ) -> "Config":
        """Build configuration from environment variables.

        This is the only place the process environment is read; the rest of
        the pipeline receives the resulting values explicitly.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
            output_file: Output path override from the command line
            verbose: Whether non-error log output goes to the console

        Returns:
            Config instance
        """
        if environ is None:
            environ = os.environ

        repository = environ.get("GITHUB_REPOSITORY") or None
        repo_url = derive_repo_url(repository)

        fetch = FetchConfig(
            user_agent=(
                f"Mozilla/5.0 (compatible; EvertKwokRSSBot/1.0; +{repo_url})"
            ),
        )
        source_url = environ.get("CARTOON_SOURCE_URL", "").strip()
        if source_url:
            fetch.url = source_url

        feed = FeedConfig(
            pages_url=derive_pages_url(repository, environ.get("GITHUB_PAGES_URL")),
        )

        log_format = environ.get("LOG_FORMAT", "text").strip().lower() or "text"
        if log_format not in LOG_FORMATS:
            raise ValueError(f"Unsupported LOG_FORMAT: {log_format}")

        log_level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unsupported LOG_LEVEL: {log_level}")

        run = RunConfig(
            verbose=verbose,
            ci=bool(environ.get("GITHUB_ACTIONS")),
            log_level=log_level,
            log_format=log_format,
            github_output=environ.get("GITHUB_OUTPUT") or None,
        )
        if output_file:
            run.output_file = output_file

        return cls(fetch=fetch, feed=feed, run=run, repository=repository)
