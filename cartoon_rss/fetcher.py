"""Source page download with bounded retries."""

import time
from collections.abc import Callable

import requests

from .config import FetchConfig
from .logging_config import create_execution_logger


class FetchError(Exception):
    """Raised when a page could not be downloaded within the retry budget."""

    def __init__(self, url: str, attempts: int, message: str):
        super().__init__(f"Failed to fetch {url} after {attempts} attempts: {message}")
        self.url = url
        self.attempts = attempts


class PageFetcher:
    """Downloads the source page over HTTP."""

    def __init__(
        self,
        config: FetchConfig,
        execution_id: str | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize PageFetcher with configuration.

        Args:
            config: Fetch configuration (timeout, retry policy, user agent)
            execution_id: Execution ID for logging context
            session: Optional pre-built requests session
            sleep: Blocking wait used between attempts
        """
        self.config = config
        self.logger = create_execution_logger("fetcher", execution_id)
        self.session = session or requests.Session()
        self.session.headers.update(config.headers())
        self._sleep = sleep

    def fetch(self, url: str | None = None) -> bytes:
        """Fetch a page, retrying failed attempts with linear backoff.

        Args:
            url: Page URL (defaults to the configured source URL)

        Returns:
            Raw response body

        Raises:
            FetchError: If every attempt failed
        """
        url = url or self.config.url
        max_retries = max(1, self.config.max_retries)

        for attempt in range(1, max_retries + 1):
            self.logger.info(
                f"Fetching {url} (attempt {attempt}/{max_retries})",
                url=url,
                attempt=attempt,
            )
            try:
                response = self.session.get(url, timeout=self.config.timeout)
                response.raise_for_status()
                if not 200 <= response.status_code < 300:
                    raise requests.HTTPError(
                        f"Unexpected status {response.status_code} for url: {url}",
                        response=response,
                    )
            except requests.RequestException as e:
                self.logger.warning(
                    f"Attempt {attempt} failed: {e}",
                    url=url,
                    attempt=attempt,
                    error=str(e),
                )
                if attempt >= max_retries:
                    raise FetchError(url, attempt, str(e)) from e

                delay = self.config.retry_delay * attempt
                self.logger.debug(
                    f"Waiting {delay} seconds before retry", url=url, delay=delay
                )
                self._sleep(delay)
                continue

            content = response.content
            self.logger.info(
                f"Successfully fetched {url} ({len(content)} bytes)",
                url=url,
                status_code=response.status_code,
                content_length=len(content),
            )
            return content

        # max_retries is at least 1, so the loop always returns or raises
        raise FetchError(url, max_retries, "no attempts made")
