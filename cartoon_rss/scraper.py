"""Pipeline orchestration for the cartoon RSS generator."""

import random
import time
from datetime import UTC, date, datetime

from .config import Config
from .extractor import CandidateExtractor
from .fallback import generate_fallback
from .fetcher import PageFetcher
from .inference import MetadataInferencer
from .logging_config import create_execution_logger
from .models import ContentItem, RunResult
from .normalize import normalize
from .renderer import FeedRenderer
from .writer import write_atomic


class NoItemsError(RuntimeError):
    """Raised when a run ends up with nothing to put in the feed."""


class CartoonScraper:
    """Turns the cartoon archive page into an ordered list of items."""

    def __init__(
        self,
        config: Config,
        fetcher: PageFetcher | None = None,
        today: date | None = None,
        rng: random.Random | None = None,
        execution_id: str | None = None,
    ):
        """Initialize the scraper.

        Args:
            config: Run configuration
            fetcher: Page fetcher (built from ``config.fetch`` if omitted)
            today: Processing date used for date fallbacks
            rng: Random source for fallback days
            execution_id: Execution ID for logging context
        """
        self.config = config
        self.today = today
        self.rng = rng
        self.execution_id = execution_id
        self.logger = create_execution_logger("scraper", execution_id)
        self.fetcher = fetcher or PageFetcher(config.fetch, execution_id=execution_id)
        self.extractor = CandidateExtractor(execution_id=execution_id)
        self.inferencer = MetadataInferencer(
            artist=config.feed.artist, today=today, execution_id=execution_id
        )
        self.used_fallback = False

    def scrape(self) -> list[ContentItem]:
        """Scrape the archive, substituting fallback data on failure.

        Returns:
            Unique items ordered newest first
        """
        self.logger.info("Starting cartoon scraping process...")
        self.used_fallback = False
        source_url = self.config.fetch.url

        try:
            html = self.fetcher.fetch(source_url)
            candidates = self.extractor.extract(html, source_url)
            items = normalize([self.inferencer.infer(c) for c in candidates])
        except Exception as e:
            self.logger.error(f"Scraping failed: {e}", error=str(e))
            return self._fallback()

        if not items:
            self.logger.warning(
                "No cartoons found on the source page", source_url=source_url
            )
            return self._fallback()

        self.logger.info(
            f"Successfully scraped {len(items)} unique cartoons", item_count=len(items)
        )
        return items

    def _fallback(self) -> list[ContentItem]:
        self.logger.warning("Falling back to demo data...")
        self.used_fallback = True
        return normalize(generate_fallback(today=self.today, rng=self.rng))


def write_github_outputs(path: str, outputs: dict[str, str]) -> None:
    """Append ``name=value`` lines to the GitHub Actions output file."""
    with open(path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(f"{name}={value}\n")


def run(
    config: Config,
    scraper: CartoonScraper | None = None,
    now: datetime | None = None,
    execution_id: str | None = None,
) -> RunResult:
    """
    Scrape, render and write the feed once.

    Args:
        config: Run configuration
        scraper: Optional pre-built scraper
        now: Build time for the feed (defaults to the current UTC time)
        execution_id: Execution ID for logging context

    Returns:
        RunResult describing the written feed

    Raises:
        NoItemsError: If no items were produced, not even fallback data
    """
    if not execution_id:
        execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    started = time.monotonic()
    main_logger.log_execution_start(
        source_url=config.fetch.url, output_file=config.run.output_file
    )

    scraper = scraper or CartoonScraper(config, execution_id=execution_id)
    items = scraper.scrape()

    if not items:
        main_logger.error("No cartoons found!")
        main_logger.log_execution_end(success=False)
        raise NoItemsError("No cartoons found")

    channel = config.feed.channel_meta()
    renderer = FeedRenderer(execution_id=execution_id)
    rss_xml = renderer.render(items, channel, now=now)
    size = write_atomic(config.run.output_file, rss_xml, execution_id=execution_id)

    result = RunResult(
        item_count=len(items),
        latest_date=items[0].published_at,
        oldest_date=items[-1].published_at,
        processing_time=time.monotonic() - started,
        feed_size_kb=size / 1024,
        output_file=config.run.output_file,
        used_fallback=scraper.used_fallback,
    )

    if config.run.ci and config.run.github_output:
        write_github_outputs(
            config.run.github_output,
            {
                "cartoon_count": str(result.item_count),
                "latest_date": result.latest_date.isoformat(),
                "oldest_date": result.oldest_date.isoformat(),
                "processing_time": f"{result.processing_time:.2f}s",
                "feed_size": f"{result.feed_size_kb:.1f} KB",
            },
        )

    main_logger.log_metrics(
        {
            "item_count": result.item_count,
            "used_fallback": result.used_fallback,
            "feed_size_kb": round(result.feed_size_kb, 1),
        }
    )
    main_logger.log_execution_end(success=True)
    return result
