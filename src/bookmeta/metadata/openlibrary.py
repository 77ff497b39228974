# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up openlibrary.org by ISBN, OLID, or title/author and returns scored BookMetadata.

import logging
import re

from bookmeta.metadata.errors import ProviderError
from bookmeta.metadata.http import HttpClient
from bookmeta.metadata.isbn import clean_isbn
from bookmeta.metadata.openlibrary_parser import (
    parse_books_api_entry,
    parse_search_results,
    score_openlibrary,
)
from bookmeta.metadata.types import BookMetadata

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = 10

PROVIDER_ID = "open-library"
PROVIDER_NAME = "Open Library"
DEFAULT_PRIORITY = 2

# Matches a colon followed by a space and remaining text (subtitle pattern).
_SUBTITLE_RE = re.compile(r"\s*:\s+.+$")


def _strip_subtitle(title: str) -> str | None:
    """Remove subtitle from a title string (text after ": ").

    Returns the stripped title, or None if no subtitle was found or
    stripping would produce an identical or empty string.
    """
    stripped = _SUBTITLE_RE.sub("", title).strip()
    if stripped and stripped != title.strip():
        return stripped
    return None


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    Supports ISBN and OLID lookup through the books API and title/author
    search through the search API. Uses dependency-injected HttpClient for
    testability; the client owns timeouts and retries.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        enabled: bool = True,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        self._http = http_client
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
        """Look up a single edition by ISBN (separators allowed)."""
        clean = clean_isbn(isbn)
        if not clean:
            return None
        return self._lookup_bibkey(f"ISBN:{clean}")

    def find_by_provider_id(self, provider_specific_id: str) -> BookMetadata | None:
        """Look up an edition by its Open Library id (e.g. "OL7353617M")."""
        olid = (provider_specific_id or "").strip()
        if not olid:
            return None
        return self._lookup_bibkey(f"OLID:{olid}")

    def search_by_title(self, title: str, author: str | None = None) -> list[BookMetadata]:
        """Search Open Library by title and optional author.

        If the initial search returns no results and the title contains a
        subtitle (text after ": "), retries with the subtitle stripped.
        Results keep Open Library's relevance order.
        """
        if not title or not title.strip():
            return []
        results = self._search(title.strip(), author)
        if not results:
            stripped = _strip_subtitle(title)
            if stripped:
                logger.debug("No Open Library hits for %r, retrying as %r", title, stripped)
                results = self._search(stripped, author)
        return results

    def test_connection(self) -> bool:
        """Run a one-result search and check the response shape."""
        try:
            data = self._http.get(
                f"{_OL_BASE}/search.json", params={"title": "test", "limit": "1"}
            )
        except ProviderError as exc:
            logger.warning("Open Library connection test failed: %s", exc)
            return False
        return "docs" in data

    def _lookup_bibkey(self, bibkey: str) -> BookMetadata | None:
        params = {"bibkeys": bibkey, "format": "json", "jscmd": "data"}
        try:
            data = self._http.get(f"{_OL_BASE}/api/books", params=params)
            entry = data.get(bibkey)
            if not entry:
                return None
            metadata = parse_books_api_entry(entry)
        except ProviderError as exc:
            logger.warning("Open Library lookup failed for %s: %s", bibkey, exc)
            return None
        return self._stamp(metadata)

    def _search(self, title: str, author: str | None) -> list[BookMetadata]:
        params: dict[str, str] = {"title": title, "limit": str(_SEARCH_LIMIT)}
        if author and author.strip():
            params["author"] = author.strip()

        try:
            data = self._http.get(f"{_OL_BASE}/search.json", params=params)
            results = parse_search_results(data)
        except ProviderError as exc:
            logger.warning(
                "Open Library search failed for title=%s author=%s: %s", title, author, exc
            )
            return []
        return [self._stamp(meta) for meta in results]

    def _stamp(self, metadata: BookMetadata) -> BookMetadata:
        """Attach provenance and this provider's confidence score."""
        return metadata.with_changes(
            provider_id=PROVIDER_ID,
            provider_name=PROVIDER_NAME,
            confidence=score_openlibrary(metadata),
        )

    def __repr__(self) -> str:
        return f"OpenLibraryProvider(enabled={self._enabled}, priority={self._priority})"
