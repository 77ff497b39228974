# ABOUTME: Confidence scoring helpers for provider adapters and caller-side relevance ranking.
# ABOUTME: Adapters own their completeness weights; the aggregator only consumes the score.

from collections.abc import Mapping, Sequence
from difflib import SequenceMatcher

from bookmeta.metadata.types import BookMetadata

# Every completeness score starts here before per-field points are added.
BASE_CONFIDENCE = 0.5

# Relevance weights for rank_by_relevance; they sum to 1.0
_WEIGHT_CONFIDENCE = 0.5
_WEIGHT_TITLE = 0.3
_WEIGHT_AUTHOR = 0.2

# Similarity awarded when one string contains the other.
_CONTAINMENT_SIMILARITY = 0.8


def completeness_score(
    populated: Mapping[str, bool], weights: Mapping[str, float], base: float = BASE_CONFIDENCE
) -> float:
    """Point-additive confidence from which fields a provider populated.

    Args:
        populated: Field name -> whether the provider's payload had a value.
        weights: Field name -> points added when that field is populated.
        base: Starting score before any points are added.

    Returns:
        The score clamped to [0.0, 1.0].
    """
    score = base
    for field_name, weight in weights.items():
        if populated.get(field_name):
            score += weight
    return max(0.0, min(1.0, round(score, 4)))


def string_similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0.0, 1.0].

    Exact matches score 1.0, containment scores 0.8, anything else falls back
    to SequenceMatcher's ratio.
    """
    a = a.strip().lower()
    b = b.strip().lower()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if a in b or b in a:
        return _CONTAINMENT_SIMILARITY
    return SequenceMatcher(None, a, b).ratio()


def relevance_score(candidate: BookMetadata, title: str, author: str | None = None) -> float:
    """Blend a candidate's own confidence with how well it matches the query."""
    score = _WEIGHT_CONFIDENCE * (candidate.confidence or 0.0)

    if candidate.title and title:
        score += _WEIGHT_TITLE * string_similarity(candidate.title, title)

    if author and candidate.authors:
        best = max(
            (
                string_similarity(a.display_name, author)
                for a in candidate.authors
                if a.display_name
            ),
            default=0.0,
        )
        score += _WEIGHT_AUTHOR * best

    return score


def rank_by_relevance(
    candidates: Sequence[BookMetadata], title: str, author: str | None = None
) -> list[BookMetadata]:
    """Return candidates sorted by descending relevance to a title/author query.

    The sort is stable, so equally relevant candidates keep their incoming
    (provider priority) order. The aggregator never calls this itself; it is
    offered to callers that want query-aware ranking.
    """
    return sorted(candidates, key=lambda c: relevance_score(c, title, author), reverse=True)
