# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts OL-specific data structures into BookMetadata instances and scores them.

import logging
from typing import Any

from bookmeta.metadata.dates import parse_publication_date
from bookmeta.metadata.errors import MetadataParseError
from bookmeta.metadata.isbn import split_isbns
from bookmeta.metadata.scoring import completeness_score
from bookmeta.metadata.types import AuthorMetadata, BookMetadata

logger = logging.getLogger(__name__)

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"

# Completeness points on top of the base score. Open Library's own weighting.
_CONFIDENCE_WEIGHTS: dict[str, float] = {
    "title": 0.10,
    "authors": 0.10,
    "isbn": 0.10,
    "publisher": 0.05,
    "page_count": 0.05,
    "cover": 0.05,
    "subjects": 0.05,
}


def _first(values: Any) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return None


def _as_list(value: Any) -> list[Any]:
    """JSON arrays come back as lists; null or anything else counts as empty."""
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _names(entries: Any) -> list[str]:
    """Names from a list of {"name": ...} objects, skipping malformed entries."""
    return [
        entry["name"]
        for entry in _as_list(entries)
        if isinstance(entry, dict) and isinstance(entry.get("name"), str) and entry["name"]
    ]


def _strip_key(key: str | None, prefix: str) -> str | None:
    """Turn "/books/OL123M" into "OL123M" when the key has the expected prefix."""
    if isinstance(key, str) and key.startswith(prefix):
        return key[len(prefix):]
    return None


def score_openlibrary(metadata: BookMetadata) -> float:
    """Confidence for an Open Library record, based on which fields came back."""
    populated = {
        "title": metadata.title is not None,
        "authors": bool(metadata.authors),
        "isbn": metadata.isbn is not None,
        "publisher": metadata.publisher is not None,
        "page_count": bool(metadata.page_count),
        "cover": metadata.best_cover is not None,
        "subjects": bool(metadata.subjects),
    }
    return completeness_score(populated, _CONFIDENCE_WEIGHTS)


def parse_books_api_entry(data: dict[str, Any]) -> BookMetadata:
    """Parse one entry of the /api/books?jscmd=data response.

    The books API keys its response by bibkey ("ISBN:...", "OLID:..."); the
    caller extracts the entry. Publishers, authors and subjects arrive as
    lists of {"name": ...} objects. Fields that are null or of the wrong JSON
    type are treated as missing.

    Raises:
        MetadataParseError: If the entry is not an object or a field cannot
            be converted.
    """
    if not isinstance(data, dict):
        raise MetadataParseError(f"Expected an object, got {type(data).__name__}")
    try:
        return _parse_books_api_entry(data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise MetadataParseError(f"Invalid Open Library entry {data.get('key')}: {exc}") from exc


def _parse_books_api_entry(data: dict[str, Any]) -> BookMetadata:
    identifiers = _as_dict(data.get("identifiers"))
    isbn_10, isbn_13 = split_isbns(
        _as_list(identifiers.get("isbn_13")) + _as_list(identifiers.get("isbn_10"))
    )

    publisher = _first(data.get("publishers"))
    publication_date, publication_year = parse_publication_date(data.get("publish_date"))

    authors = tuple(AuthorMetadata.author(name) for name in _names(data.get("authors")))

    classifications = _as_dict(data.get("classifications"))
    cover = _as_dict(data.get("cover"))

    return BookMetadata(
        isbn_10=isbn_10,
        isbn_13=isbn_13,
        title=data.get("title"),
        subtitle=data.get("subtitle"),
        publisher=publisher.get("name") if isinstance(publisher, dict) else None,
        publication_date=publication_date,
        publication_year=publication_year,
        page_count=data.get("number_of_pages"),
        open_library_id=_strip_key(data.get("key"), "/books/"),
        goodreads_id=_first(identifiers.get("goodreads")),
        asin=_first(identifiers.get("amazon")),
        lccn=_first(identifiers.get("lccn")),
        oclc=_first(identifiers.get("oclc")),
        authors=authors,
        subjects=_names(data.get("subjects")),
        dewey_decimal=_first(classifications.get("dewey_decimal_class")),
        lcc=_first(classifications.get("lc_classifications")),
        weight=data.get("weight"),
        small_thumbnail=cover.get("small"),
        thumbnail=cover.get("medium"),
        large_image=cover.get("large"),
    )


def parse_search_doc(doc: dict[str, Any]) -> BookMetadata:
    """Parse one doc from the /search.json response.

    Search docs describe works, so the OL id is the works id and only the
    first publish year is known.

    Raises:
        MetadataParseError: If the doc is not an object or a field cannot be
            converted.
    """
    if not isinstance(doc, dict):
        raise MetadataParseError(f"Expected an object, got {type(doc).__name__}")
    try:
        return _parse_search_doc(doc)
    except (TypeError, ValueError, AttributeError) as exc:
        raise MetadataParseError(f"Invalid Open Library doc {doc.get('key')}: {exc}") from exc


def _parse_search_doc(doc: dict[str, Any]) -> BookMetadata:
    isbn_10, isbn_13 = split_isbns(doc.get("isbn"))
    first_year = doc.get("first_publish_year")
    cover_id = doc.get("cover_i")
    if not isinstance(cover_id, int):
        cover_id = None

    authors = tuple(
        AuthorMetadata.author(name)
        for name in _as_list(doc.get("author_name"))
        if isinstance(name, str) and name.strip()
    )

    return BookMetadata(
        isbn_10=isbn_10,
        isbn_13=isbn_13,
        title=doc.get("title"),
        subtitle=doc.get("subtitle"),
        language=_first(doc.get("language")),
        publisher=_first(doc.get("publisher")),
        publication_year=first_year if isinstance(first_year, int) else None,
        page_count=doc.get("number_of_pages_median"),
        open_library_id=_strip_key(doc.get("key"), "/works/"),
        goodreads_id=_first(doc.get("id_goodreads")),
        asin=_first(doc.get("id_amazon")),
        authors=authors,
        subjects=_as_list(doc.get("subject")),
        small_thumbnail=build_cover_url(cover_id, "S") if cover_id else None,
        thumbnail=build_cover_url(cover_id, "M") if cover_id else None,
        large_image=build_cover_url(cover_id, "L") if cover_id else None,
    )


def parse_search_results(data: dict[str, Any]) -> list[BookMetadata]:
    """Parse an Open Library Search API response into a list of BookMetadata.

    A malformed doc is logged and skipped; the rest of the page still parses.
    """
    docs = data.get("docs")
    if docs is None:
        return []
    if not isinstance(docs, list):
        raise MetadataParseError("Search response 'docs' is not a list")

    results: list[BookMetadata] = []
    for doc in docs:
        if not isinstance(doc, dict):
            continue
        try:
            results.append(parse_search_doc(doc))
        except MetadataParseError as exc:
            logger.warning("Skipping unparseable Open Library doc: %s", exc)
    return results


def build_cover_url(cover_id: int, size: str = "L") -> str:
    """Build an Open Library cover image URL for a cover id.

    Args:
        cover_id: The numeric cover id from a search doc.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/id/{cover_id}-{size}.jpg"
