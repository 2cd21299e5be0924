"""CLI entry point for the cartoon RSS generator."""

import sys
from datetime import UTC, datetime

import click

from .config import Config
from .logging_config import create_execution_logger, setup_logging
from .scraper import NoItemsError, run


def _print_banner(config: Config) -> None:
    click.echo()
    click.echo("🎨 Evert Kwok Cartoon RSS Scraper v2.0")
    click.echo("==========================================")
    click.echo(f"🕐 Started at: {datetime.now(UTC).isoformat()}")
    click.echo(f"🎯 Source: {config.fetch.url}")
    click.echo(f"📄 Output: {config.run.output_file}")
    click.echo(f"🔧 Environment: {'GitHub Actions' if config.run.ci else 'Local'}")
    click.echo()


def _print_summary(result, config: Config) -> None:
    click.echo()
    click.echo("✅ RSS Generation Complete!")
    click.echo("============================")
    click.echo(f"📊 Total cartoons: {result.item_count}")
    click.echo(
        f"📅 Date range: {result.oldest_date.isoformat()} "
        f"to {result.latest_date.isoformat()}"
    )
    click.echo(f"📄 RSS file size: {result.feed_size_kb:.1f} KB")
    click.echo(f"⏱️  Processing time: {result.processing_time:.2f}s")
    click.echo(f"🔗 Feed URL: {config.feed.self_link}")
    if result.used_fallback:
        click.echo("⚠️  Source unavailable, feed contains demo data")
    click.echo()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: docs/feed.xml)",
)
def main(verbose: bool, output_file: str | None) -> None:
    """Scrape Evert Kwok's cartoon archive and write an RSS 2.0 feed.

    \b
    Environment variables:
      GITHUB_ACTIONS     Detected automatically in GitHub Actions
      GITHUB_REPOSITORY  Used for generating proper URLs
      GITHUB_PAGES_URL   Used for the feed self-reference URL
      GITHUB_OUTPUT      Receives step outputs in GitHub Actions
      LOG_LEVEL          Logging level (default: INFO)
      LOG_FORMAT         text or json (default: text)
    """
    try:
        config = Config.from_env(output_file=output_file, verbose=verbose)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    setup_logging(
        verbose=config.run.verbose,
        ci=config.run.ci,
        log_level=config.run.log_level,
        log_format=config.run.log_format,
    )
    logger = create_execution_logger("cli")

    _print_banner(config)

    try:
        result = run(config, execution_id=logger.execution_id)
    except NoItemsError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", error=str(e), exc_info=config.run.verbose)
        if config.run.ci:
            click.echo("::error::RSS generation failed")
        else:
            click.echo("", err=True)
            click.echo("❌ Unhandled error occurred:", err=True)
            click.echo(str(e), err=True)
        sys.exit(1)

    _print_summary(result, config)


if __name__ == "__main__":
    main()
