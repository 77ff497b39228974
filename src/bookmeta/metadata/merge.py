# ABOUTME: Field-level merge of candidate BookMetadata records into one consolidated record.
# ABOUTME: Scalars take the first present value in priority order; authors and tag sets are unioned.

from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from bookmeta.metadata.types import SET_FIELDS, AuthorMetadata, BookMetadata

# Fields the reducer computes itself rather than taking first-present.
_PROVENANCE_FIELDS = frozenset({"provider_id", "provider_name", "confidence"})
_UNION_FIELDS = frozenset({"authors", *SET_FIELDS})


def _merge_authors(candidates: Sequence[BookMetadata]) -> tuple[AuthorMetadata, ...]:
    """Union authors across candidates, de-duplicated by case-insensitive name.

    The first occurrence wins, so the higher-priority provider's entry (with
    its role, bio, image) is the one kept.
    """
    seen: set[str] = set()
    merged: list[AuthorMetadata] = []
    for candidate in candidates:
        for author in candidate.authors:
            key = author.display_name.strip().casefold()
            if not key or key in seen:
                continue
            seen.add(key)
            merged.append(author)
    return tuple(merged)


def _first_present(candidates: Sequence[BookMetadata], name: str) -> tuple[Any, int | None]:
    """Return (value, index) of the first candidate with ``name`` present."""
    for index, candidate in enumerate(candidates):
        value = getattr(candidate, name)
        if value is not None:
            return value, index
    return None, None


def merge_metadata(candidates: Sequence[BookMetadata]) -> BookMetadata:
    """Reduce candidates into one record, field by field.

    ``candidates`` is expected in ascending provider-priority order, as the
    aggregator returns them.

    - Scalar fields: the first candidate with the field present wins.
    - ``authors``: union, duplicates dropped by case-insensitive name.
    - ``subjects``/``genres``/``tags``: union, exact string match.
    - ``confidence``: maximum across inputs (absent counts as 0.0).
    - ``provider_id``/``provider_name``: from whichever candidate supplied the
      title, or the first candidate if none has a title.

    An empty input yields a record with every field absent and confidence 0.0.
    """
    if not candidates:
        return BookMetadata(confidence=0.0)

    merged: dict[str, Any] = {}
    title_source: int | None = None

    for f in fields(BookMetadata):
        if f.name in _PROVENANCE_FIELDS:
            continue
        if f.name == "authors":
            merged[f.name] = _merge_authors(candidates)
        elif f.name in _UNION_FIELDS:
            merged[f.name] = frozenset().union(*(getattr(c, f.name) for c in candidates))
        else:
            value, index = _first_present(candidates, f.name)
            merged[f.name] = value
            if f.name == "title":
                title_source = index

    source = candidates[title_source if title_source is not None else 0]
    merged["provider_id"] = source.provider_id
    merged["provider_name"] = source.provider_name
    merged["confidence"] = max(c.confidence or 0.0 for c in candidates)

    return BookMetadata(**merged)
