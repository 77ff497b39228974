# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Queries the volumes API by ISBN, volume id, or title/author; an API key is optional.

import logging

from bookmeta.metadata.errors import MetadataParseError, ProbeError, ProviderError
from bookmeta.metadata.googlebooks_parser import parse_volume, parse_volumes_response, score_volume
from bookmeta.metadata.http import HttpClient
from bookmeta.metadata.isbn import clean_isbn
from bookmeta.metadata.types import BookMetadata

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_MAX_RESULTS = 10

# A well-known ISBN used by the connection probe.
_PROBE_ISBN = "9780134685991"

# Statuses that mean the configured key was refused rather than the network failing.
_AUTH_FAILURE_STATUSES = {400, 401, 403}

PROVIDER_ID = "google-books"
PROVIDER_NAME = "Google Books"
DEFAULT_PRIORITY = 1


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books volumes API.

    Works anonymously for basic lookups; an API key raises the quota.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        api_key: str | None = None,
        enabled: bool = True,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._enabled = enabled
        self._priority = priority

    @property
    def provider_id(self) -> str:
        return PROVIDER_ID

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def priority(self) -> int:
        return self._priority

    def find_by_isbn(self, isbn: str) -> BookMetadata | None:
        """Return the first volume matching the ISBN, or None."""
        clean = clean_isbn(isbn)
        if not clean:
            return None
        results = self._query(f"isbn:{clean}", max_results=1)
        return results[0] if results else None

    def search_by_title(self, title: str, author: str | None = None) -> list[BookMetadata]:
        """Search volumes by title and optional author, in Google's relevance order."""
        if not title or not title.strip():
            return []
        query = f"intitle:{title.strip()}"
        if author and author.strip():
            query += f" inauthor:{author.strip()}"
        return self._query(query, max_results=_MAX_RESULTS)

    def find_by_provider_id(self, provider_specific_id: str) -> BookMetadata | None:
        """Fetch a single volume by its Google Books volume id."""
        volume_id = (provider_specific_id or "").strip()
        if not volume_id:
            return None
        try:
            item = self._http.get(f"{_VOLUMES_URL}/{volume_id}", params=self._params())
            metadata = parse_volume(item)
        except ProviderError as exc:
            logger.warning("Google Books volume lookup failed for %s: %s", volume_id, exc)
            return None
        return self._stamp(metadata, score_volume(item["volumeInfo"]))

    def test_connection(self) -> bool:
        """Query a known ISBN and check that the response has a totalItems field.

        Raises:
            ProbeError: If an API key is configured and Google rejects it.
        """
        params = self._params(q=f"isbn:{_PROBE_ISBN}", maxResults="1")
        try:
            data = self._http.get(_VOLUMES_URL, params=params)
        except ProviderError as exc:
            status = getattr(exc, "status_code", None)
            if self._api_key and status in _AUTH_FAILURE_STATUSES:
                raise ProbeError(f"API key rejected (HTTP {status})") from exc
            logger.warning("Google Books connection test failed: %s", exc)
            return False
        return "totalItems" in data

    def _query(self, query: str, *, max_results: int) -> list[BookMetadata]:
        params = self._params(q=query, maxResults=str(max_results))
        try:
            data = self._http.get(_VOLUMES_URL, params=params)
            items = parse_volumes_response(data)
        except ProviderError as exc:
            logger.warning("Google Books query %r failed: %s", query, exc)
            return []

        results: list[BookMetadata] = []
        for item in items:
            try:
                metadata = parse_volume(item)
            except MetadataParseError as exc:
                logger.warning("Skipping unparseable Google Books item %s: %s", item.get("id"), exc)
                continue
            results.append(self._stamp(metadata, score_volume(item["volumeInfo"])))
        return results

    def _params(self, **params: str) -> dict[str, str]:
        if self._api_key:
            params["key"] = self._api_key
        return params

    def _stamp(self, metadata: BookMetadata, confidence: float) -> BookMetadata:
        return metadata.with_changes(
            provider_id=PROVIDER_ID,
            provider_name=PROVIDER_NAME,
            confidence=confidence,
        )

    def __repr__(self) -> str:
        key_state = "set" if self._api_key else "unset"
        return (
            f"GoogleBooksProvider(api_key={key_state}, enabled={self._enabled}, "
            f"priority={self._priority})"
        )
