# ABOUTME: Core metadata value objects shared by providers, the aggregator, and the merge reducer.
# ABOUTME: BookMetadata and AuthorMetadata are frozen; absent values are None or empty collections.

from collections.abc import Iterable
from dataclasses import dataclass, field, fields, replace
from datetime import date
from typing import Any

# Cover fields ordered from lowest to highest resolution.
COVER_FIELDS = (
    "small_thumbnail",
    "thumbnail",
    "medium_image",
    "large_image",
    "extra_large_image",
)

# Collection-valued fields that the merge reducer unions instead of taking first.
SET_FIELDS = ("subjects", "genres", "tags")


def _blank_to_none(value: Any) -> Any:
    """Collapse empty/whitespace-only strings to None so absence is unambiguous."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_string_set(values: Iterable[str] | None) -> frozenset[str]:
    if not values:
        return frozenset()
    return frozenset(v for v in values if isinstance(v, str) and v.strip())


@dataclass(frozen=True)
class AuthorMetadata:
    """A contributor to a book as reported by one provider.

    Role is free text ("author", "editor", "translator", "illustrator", ...).
    """

    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = "author"
    bio: str | None = None
    image_url: str | None = None

    def __post_init__(self) -> None:
        for f in ("name", "first_name", "last_name", "bio", "image_url"):
            object.__setattr__(self, f, _blank_to_none(getattr(self, f)))

    @classmethod
    def author(cls, name: str) -> "AuthorMetadata":
        return cls(name=name)

    @classmethod
    def with_role(cls, name: str, role: str) -> "AuthorMetadata":
        return cls(name=name, role=role)

    @classmethod
    def from_parts(
        cls, first_name: str | None, last_name: str | None, role: str = "author"
    ) -> "AuthorMetadata":
        """Build an author from a first/last pair, deriving the full name."""
        full_name = " ".join(p for p in (first_name, last_name) if p) or None
        return cls(name=full_name, first_name=first_name, last_name=last_name, role=role)

    @property
    def display_name(self) -> str:
        """Name for display and de-duplication; falls back to the first/last pair."""
        if self.name:
            return self.name
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclass(frozen=True)
class BookMetadata:
    """Bibliographic record for one book as produced by a provider or the merge reducer.

    Every field is optional. Scalars use None for "unknown", collections use an
    empty tuple/frozenset, and blank strings are normalized to None on
    construction so that present vs. unknown is never ambiguous.

    Instances are immutable; use ``with_changes`` to derive an updated copy.
    """

    # Identity
    isbn_10: str | None = None
    isbn_13: str | None = None
    title: str | None = None
    subtitle: str | None = None
    original_title: str | None = None
    title_sort: str | None = None
    description: str | None = None
    language: str | None = None

    # Publication
    publisher: str | None = None
    publication_date: date | None = None
    publication_year: int | None = None
    page_count: int | None = None

    # External identifiers
    google_books_id: str | None = None
    open_library_id: str | None = None
    goodreads_id: str | None = None
    asin: str | None = None
    doi: str | None = None
    lccn: str | None = None
    oclc: str | None = None

    authors: tuple[AuthorMetadata, ...] = ()

    # Classification
    subjects: frozenset[str] = field(default_factory=frozenset)
    genres: frozenset[str] = field(default_factory=frozenset)
    tags: frozenset[str] = field(default_factory=frozenset)
    dewey_decimal: str | None = None
    lcc: str | None = None

    # Series
    series_name: str | None = None
    series_index: float | None = None

    # Physical attributes
    format: str | None = None
    binding: str | None = None
    dimensions: str | None = None
    weight: str | None = None

    # Covers, lowest to highest resolution
    small_thumbnail: str | None = None
    thumbnail: str | None = None
    medium_image: str | None = None
    large_image: str | None = None
    extra_large_image: str | None = None

    # Ratings
    average_rating: float | None = None
    ratings_count: int | None = None

    # Provenance
    provider_id: str | None = None
    provider_name: str | None = None
    confidence: float | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "authors":
                object.__setattr__(self, f.name, tuple(value or ()))
            elif f.name in SET_FIELDS:
                object.__setattr__(self, f.name, _to_string_set(value))
            else:
                object.__setattr__(self, f.name, _blank_to_none(value))

        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)

    def with_changes(self, **changes: Any) -> "BookMetadata":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def isbn(self) -> str | None:
        """Preferred ISBN: ISBN-13 when known, otherwise ISBN-10."""
        return self.isbn_13 or self.isbn_10

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(a.display_name for a in self.authors if a.display_name)

    @property
    def best_cover(self) -> str | None:
        """Highest-resolution cover URL present, if any."""
        for name in reversed(COVER_FIELDS):
            url = getattr(self, name)
            if url:
                return url
        return None

    def is_empty(self) -> bool:
        """Whether every bibliographic field is absent (provenance is ignored)."""
        provenance = {"provider_id", "provider_name", "confidence"}
        return not any(getattr(self, f.name) for f in fields(self) if f.name not in provenance)


@dataclass(frozen=True)
class ProviderStatus:
    """Result of probing one provider's connectivity."""

    provider_id: str
    provider_name: str
    enabled: bool
    connected: bool
    error: str | None = None
