"""Client for fetching page sources over HTTP."""

import logging
import re
from time import sleep

import httpx

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

GITHUB_SOURCE_PATTERN = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)"
    r"/(?P<kind>blob|tree)/(?P<ref>[^/]+)(?:/(?P<path>.*?))?/?$"
)
RAW_GITHUB_URL = "https://raw.githubusercontent.com"
DIRECTORY_INDEX_FILE = "README.md"


class SourceClient:
    """Fetches raw page sources from remote locations.

    GitHub "blob" URLs are rewritten to their raw.githubusercontent.com
    counterparts so the page source is returned instead of GitHub's HTML view.
    GitHub "tree" (directory) URLs resolve to the directory's README.md.

    Connection failures, timeouts, 429 and 5xx responses are retried;
    a missing source (404) or any other error status fails at once.

    Config keys:
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Number of attempts per source (default: 3)
        retry_delay: Delay between attempts in seconds (default: 1)
        headers: Headers sent with every request

    Example:
        with SourceClient({"timeout": 10}) as client:
            text = client.fetch("https://github.com/org/repo/blob/master/README.md")
    """

    def __init__(self, config: dict | None = None):
        self._config = dict(config or {})
        self._client: httpx.Client | None = None

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return int(self._config.get("retry_attempts", 3))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @staticmethod
    def raw_url(url: str) -> str:
        """Return the URL that serves the raw content behind ``url``.

        Examples:
            >>> SourceClient.raw_url("https://github.com/a/b/blob/master/docs/x.md")
            'https://raw.githubusercontent.com/a/b/master/docs/x.md'
            >>> SourceClient.raw_url("https://github.com/a/b/tree/v2/docs")
            'https://raw.githubusercontent.com/a/b/v2/docs/README.md'
        """
        match = GITHUB_SOURCE_PATTERN.match(url)
        if match is None:
            return url

        path = match["path"] or ""
        if match["kind"] == "tree":
            path = f"{path}/{DIRECTORY_INDEX_FILE}" if path else DIRECTORY_INDEX_FILE
        elif not path:
            return url
        return f"{RAW_GITHUB_URL}/{match['owner']}/{match['repo']}/{match['ref']}/{path}"

    def fetch(self, url: str) -> str:
        """Fetch the text content of a page source.

        Args:
            url: Absolute http(s) URL of the source file

        Returns:
            Decoded text of the response body

        Raises:
            NotFoundError: If the source does not exist
            RateLimitError: If the host keeps rate limiting after all attempts
            APIError: For other error responses
            ConnectionError: If the host cannot be reached after all attempts
        """
        raw = self.raw_url(url)
        last_error: Exception | None = None

        for attempt in range(1, self.retry_attempts + 1):
            logger.debug(f"Fetching source {raw} (attempt {attempt}/{self.retry_attempts})")
            try:
                response = self.client.get(raw)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_error = e
                logger.warning(f"Could not reach source {raw} (attempt {attempt}): {e}")
            else:
                if response.is_success:
                    return response.text
                last_error = self._source_error(url, response)
                if not self._is_transient(response):
                    raise last_error
                logger.warning(f"{last_error.message} (attempt {attempt})")

            if attempt < self.retry_attempts:
                sleep(self.retry_delay)

        if isinstance(last_error, APIError):
            raise last_error
        raise ConnectionError(
            f"Could not fetch source {url} after {self.retry_attempts} attempts"
        ) from last_error

    @staticmethod
    def _is_transient(response: httpx.Response) -> bool:
        return response.status_code == 429 or response.status_code >= 500

    @staticmethod
    def _source_error(url: str, response: httpx.Response) -> APIError:
        status_code = response.status_code
        if status_code == 404:
            return NotFoundError(f"Source not found: {url}")
        if status_code == 429:
            return RateLimitError(f"Rate limited while fetching source: {url}")
        return APIError(f"HTTP error {status_code} fetching source: {url}", status_code=status_code)
