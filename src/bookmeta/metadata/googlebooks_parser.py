# ABOUTME: Parsing functions for Google Books API volume resources.
# ABOUTME: Converts volumeInfo payloads into BookMetadata and computes the Google Books confidence.

from typing import Any

from bookmeta.metadata.dates import parse_publication_date
from bookmeta.metadata.errors import MetadataParseError
from bookmeta.metadata.scoring import completeness_score
from bookmeta.metadata.types import AuthorMetadata, BookMetadata

# Completeness points on top of the base score. Google Books' own weighting.
_CONFIDENCE_WEIGHTS: dict[str, float] = {
    "title": 0.10,
    "authors": 0.10,
    "identifiers": 0.10,
    "description": 0.05,
    "publisher": 0.05,
    "page_count": 0.05,
    "images": 0.05,
}

# imageLinks key -> BookMetadata cover field, smallest first.
_IMAGE_FIELDS = {
    "smallThumbnail": "small_thumbnail",
    "thumbnail": "thumbnail",
    "small": "medium_image",
    "medium": "large_image",
    "large": "extra_large_image",
}


def _secure(url: str | None) -> str | None:
    """Google still hands out http:// image links; upgrade them."""
    if url and url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def _as_list(value: Any) -> list[Any]:
    """JSON arrays come back as lists; null or anything else counts as empty."""
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def score_volume(volume_info: dict[str, Any]) -> float:
    """Confidence for a Google Books volume, based on which fields came back."""
    page_count = volume_info.get("pageCount")
    populated = {
        "title": bool(volume_info.get("title")),
        "authors": bool(_as_list(volume_info.get("authors"))),
        "identifiers": bool(_as_list(volume_info.get("industryIdentifiers"))),
        "description": bool(volume_info.get("description")),
        "publisher": bool(volume_info.get("publisher")),
        "page_count": isinstance(page_count, int) and page_count > 0,
        "images": bool(_as_dict(volume_info.get("imageLinks"))),
    }
    return completeness_score(populated, _CONFIDENCE_WEIGHTS)


def parse_volume(item: dict[str, Any]) -> BookMetadata:
    """Parse a Google Books volume resource into BookMetadata.

    List and object fields that come back as null or the wrong JSON type are
    treated as missing.

    Raises:
        MetadataParseError: If the resource has no volumeInfo object or a
            field cannot be converted.
    """
    volume_info = item.get("volumeInfo") if isinstance(item, dict) else None
    if not isinstance(volume_info, dict):
        raise MetadataParseError("Invalid Google Books volume: missing volumeInfo")
    try:
        return _parse_volume_info(item, volume_info)
    except (TypeError, ValueError, AttributeError) as exc:
        raise MetadataParseError(f"Invalid Google Books volume {item.get('id')}: {exc}") from exc


def _parse_volume_info(item: dict[str, Any], volume_info: dict[str, Any]) -> BookMetadata:
    isbn_10 = None
    isbn_13 = None
    for identifier in _as_list(volume_info.get("industryIdentifiers")):
        identifier = _as_dict(identifier)
        kind = identifier.get("type")
        value = identifier.get("identifier")
        if kind == "ISBN_13" and isbn_13 is None:
            isbn_13 = value
        elif kind == "ISBN_10" and isbn_10 is None:
            isbn_10 = value

    publication_date, publication_year = parse_publication_date(volume_info.get("publishedDate"))

    page_count = volume_info.get("pageCount")
    if not isinstance(page_count, int) or page_count <= 0:
        page_count = None

    image_links = _as_dict(volume_info.get("imageLinks"))
    covers = {
        field_name: _secure(image_links.get(key)) for key, field_name in _IMAGE_FIELDS.items()
    }

    authors = tuple(
        AuthorMetadata.author(name)
        for name in _as_list(volume_info.get("authors"))
        if isinstance(name, str) and name.strip()
    )

    return BookMetadata(
        isbn_10=isbn_10,
        isbn_13=isbn_13,
        title=volume_info.get("title"),
        subtitle=volume_info.get("subtitle"),
        description=volume_info.get("description"),
        language=volume_info.get("language"),
        publisher=volume_info.get("publisher"),
        publication_date=publication_date,
        publication_year=publication_year,
        page_count=page_count,
        google_books_id=item.get("id"),
        authors=authors,
        subjects=_as_list(volume_info.get("categories")),
        average_rating=volume_info.get("averageRating"),
        ratings_count=volume_info.get("ratingsCount"),
        **covers,
    )


def parse_volumes_response(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the raw volume items from a /volumes search response."""
    items = data.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise MetadataParseError("Google Books 'items' is not a list")
    return [item for item in items if isinstance(item, dict)]
