# ABOUTME: HTTP client abstraction for metadata provider API calls.
# ABOUTME: Provides timeouts, rate limiting, retry with backoff, and an injectable transport.

import logging
import threading
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from bookmeta.metadata.errors import MetadataFetchError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

DEFAULT_TIMEOUT = 10.0


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class BookmetaHttpClient:
    """HTTP client with timeout, rate limiting and retry for metadata API calls.

    Wraps httpx.Client with a per-request timeout, configurable request
    intervals and retry logic for transient failures (429, 5xx). Safe to share
    between threads; the rate limiter is serialized with a lock.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "bookmeta/0.1.0"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0
        self._rate_lock = threading.Lock()

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request with rate limiting and retry.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On timeouts, non-retryable HTTP errors,
                bodies that are not a JSON object, or exhausted retries.
        """
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.TimeoutException as exc:
                raise MetadataFetchError(f"Request timed out: {url}: {exc}") from exc
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                try:
                    body = response.json()
                except ValueError as exc:
                    raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc
                if not isinstance(body, dict):
                    raise MetadataFetchError(
                        f"Expected a JSON object from {url}, got {type(body).__name__}"
                    )
                return body

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise MetadataFetchError(
            f"HTTP {last_status} from {url} after {attempts} attempts",
            status_code=last_status,
        )

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        with self._rate_lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval and self._last_request_time > 0:
                time.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()
