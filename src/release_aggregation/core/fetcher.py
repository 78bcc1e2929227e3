"""
Parallel Atom feed fetcher.

All feeds are requested at once and the caller waits for every request to
settle. There are no retries.
"""

import time
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Optional, Sequence

import httpx

from release_aggregation.config import get_config
from release_aggregation.core.errors import FeedError, FeedErrorKind
from release_aggregation.logger import get_logger

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """Result of fetching one feed."""

    success: bool
    feed_index: int
    feed_url: str
    body: Optional[bytes] = None
    error: Optional[str] = None
    fetch_time_seconds: float = 0.0
    http_status: Optional[int] = None

    def __post_init__(self):
        """Validate fetch result."""
        if self.success and self.error:
            raise ValueError("Successful fetch cannot have an error")
        if not self.success and not self.error:
            self.error = "Unknown error"

    def to_error(self) -> Optional[FeedError]:
        """Describe a failed fetch as a transport error."""
        if self.success:
            return None
        return FeedError(
            kind=FeedErrorKind.TRANSPORT,
            feed_index=self.feed_index,
            feed_url=self.feed_url,
            message=self.error,
        )


@dataclass
class FetchStats:
    """Statistics for one batch of feed fetches."""

    total_feeds: int = 0
    successful_fetches: int = 0
    failed_fetches: int = 0
    total_bytes: int = 0
    elapsed_seconds: float = 0.0
    errors_by_type: dict = field(default_factory=dict)

    def add_result(self, result: FetchResult) -> None:
        """Add a fetch result to statistics.

        Args:
            result: FetchResult to add
        """
        self.total_feeds += 1

        if result.success:
            self.successful_fetches += 1
            self.total_bytes += len(result.body or b"")
        else:
            self.failed_fetches += 1
            error_type = result.error.split(":")[0] if result.error else "unknown"
            self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1

    @property
    def all_succeeded(self) -> bool:
        """Whether every fetch in the batch succeeded."""
        return self.failed_fetches == 0


class FeedFetcher:
    """Fetches a batch of feeds in parallel and joins on all of them."""

    def __init__(
        self,
        timeout_seconds: Optional[int] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize feed fetcher.

        Args:
            timeout_seconds: Request timeout in seconds, httpx default if unset
            user_agent: User-Agent header for HTTP requests
            client: Optional preconfigured HTTP client (mainly for tests)
        """
        config = get_config()

        self.timeout_seconds = timeout_seconds or config.fetcher.timeout_seconds
        self.user_agent = user_agent or config.fetcher.user_agent
        self.follow_redirects = config.fetcher.follow_redirects
        self.max_redirects = config.fetcher.max_redirects

        self._client = client

    def fetch_feed(
        self,
        url: str,
        feed_index: int = 0,
        client: Optional[httpx.Client] = None,
    ) -> FetchResult:
        """Fetch a single feed.

        Args:
            url: Feed URL
            feed_index: Position of the feed in its batch
            client: HTTP client to use; a temporary one is created if omitted

        Returns:
            FetchResult with the raw body or an error
        """
        start_time = time.time()
        http_status = None

        logger.debug(f"Fetching feed {feed_index}: {url}")

        try:
            if client is None:
                with self._create_client() as own_client:
                    response = self._fetch_http(own_client, url)
            else:
                response = self._fetch_http(client, url)

            http_status = response.status_code
            fetch_time = time.time() - start_time

            logger.info(
                f"Fetched feed {feed_index} ({len(response.content)} bytes) "
                f"in {fetch_time:.2f}s"
            )

            return FetchResult(
                success=True,
                feed_index=feed_index,
                feed_url=url,
                body=response.content,
                fetch_time_seconds=fetch_time,
                http_status=http_status,
            )

        except httpx.TimeoutException as e:
            error = f"Timeout: {str(e)}"
            logger.warning(f"Timeout fetching {url}")

        except httpx.HTTPStatusError as e:
            http_status = e.response.status_code
            error = f"HTTP {http_status}: {str(e)}"
            logger.warning(f"HTTP error fetching {url}: {http_status}")

        except httpx.RequestError as e:
            error = f"Request error: {str(e)}"
            logger.warning(f"Network error fetching {url}: {e}")

        return FetchResult(
            success=False,
            feed_index=feed_index,
            feed_url=url,
            error=error,
            fetch_time_seconds=time.time() - start_time,
            http_status=http_status,
        )

    def fetch_all(self, urls: Sequence[str]) -> tuple[list[FetchResult], FetchStats]:
        """Fetch every feed concurrently and wait for all of them.

        Results are returned in the order of ``urls`` regardless of which
        request finished first. A failed fetch does not cancel the others.

        Args:
            urls: Feed URLs to fetch

        Returns:
            Tuple of (results in input order, batch statistics)
        """
        start_time = time.time()
        stats = FetchStats()

        if not urls:
            return [], stats

        owns_client = self._client is None
        client = self._client or self._create_client()

        try:
            with ThreadPoolExecutor(
                max_workers=len(urls), thread_name_prefix="feed-fetch"
            ) as executor:
                futures = [
                    executor.submit(self.fetch_feed, url, index, client)
                    for index, url in enumerate(urls)
                ]
                wait(futures, return_when=ALL_COMPLETED)
                results = [future.result() for future in futures]
        finally:
            if owns_client:
                client.close()

        for result in results:
            stats.add_result(result)
        stats.elapsed_seconds = time.time() - start_time

        logger.info(
            f"Fetched {stats.successful_fetches}/{stats.total_feeds} feeds "
            f"in {stats.elapsed_seconds:.2f}s"
        )

        return results, stats

    def _create_client(self) -> httpx.Client:
        """Create an HTTP client with the configured settings."""
        options = {
            "follow_redirects": self.follow_redirects,
            "max_redirects": self.max_redirects,
            "headers": {"User-Agent": self.user_agent},
        }
        if self.timeout_seconds is not None:
            options["timeout"] = self.timeout_seconds
        return httpx.Client(**options)

    def _fetch_http(self, client: httpx.Client, url: str) -> httpx.Response:
        """Fetch URL with HTTP client.

        Args:
            client: HTTP client
            url: URL to fetch

        Returns:
            httpx Response

        Raises:
            httpx.TimeoutException: On timeout
            httpx.HTTPStatusError: On non-2xx status
            httpx.RequestError: On network error
        """
        response = client.get(url)
        response.raise_for_status()
        return response


def create_fetcher(client: Optional[httpx.Client] = None) -> FeedFetcher:
    """Create a configured FeedFetcher instance.

    Args:
        client: Optional HTTP client shared by all fetches

    Returns:
        Configured FeedFetcher instance
    """
    return FeedFetcher(client=client)
