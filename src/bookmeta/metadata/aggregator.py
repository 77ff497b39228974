# ABOUTME: MetadataAggregator fans lookups out to every enabled provider and collects results.
# ABOUTME: Offers all-candidates, best-candidate and merged views plus connectivity probing.

import logging
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from bookmeta.metadata.fanout import fan_out
from bookmeta.metadata.merge import merge_metadata
from bookmeta.metadata.prober import probe_providers
from bookmeta.metadata.provider import MetadataProvider
from bookmeta.metadata.registry import ProviderRegistry
from bookmeta.metadata.types import BookMetadata, ProviderStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Closeable(Protocol):
    def close(self) -> None: ...


def _with_confidence(metadata: BookMetadata) -> BookMetadata:
    """Aggregator output always carries a confidence; absent counts as 0.0."""
    if metadata.confidence is None:
        return metadata.with_changes(confidence=0.0)
    return metadata


class MetadataAggregator:
    """Queries every enabled provider concurrently and combines what comes back.

    One provider failing, timing out or finding nothing never fails the
    aggregate call: that provider simply contributes nothing. Output lists are
    ordered by ascending provider priority (ties by registration order), not by
    which provider answered first, so identical inputs give identical output.

    Args:
        registry: Provider registry to read from; a new empty one by default.
        timeout: Deadline in seconds for one fan-out. Providers that miss it
            contribute nothing and their late results are discarded. None
            waits for every provider (adapters enforce their own HTTP timeouts).
        max_workers: Optional cap on concurrent provider calls per fan-out.
    """

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        *,
        timeout: float | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ProviderRegistry()
        self._timeout = timeout
        self._max_workers = max_workers
        self._resources: list[Closeable] = []

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def register_provider(self, provider: MetadataProvider) -> None:
        self._registry.register(provider)
        logger.info(
            "Registered metadata provider: %s (id=%s, priority=%d, enabled=%s)",
            provider.provider_name,
            provider.provider_id,
            provider.priority,
            provider.enabled,
        )

    def all_providers(self) -> list[MetadataProvider]:
        return self._registry.all_providers()

    def enabled_providers(self) -> list[MetadataProvider]:
        return self._registry.enabled_providers()

    def find_by_isbn_from_all_providers(self, isbn: str | None) -> list[BookMetadata]:
        """Look up an ISBN on every enabled provider.

        Returns every match in ascending provider-priority order. Blank input
        returns an empty list without calling any provider.
        """
        if not isbn or not isbn.strip():
            logger.debug("Blank ISBN; skipping provider lookup")
            return []

        slots = self._collect(lambda p: p.find_by_isbn(isbn), f"find_by_isbn({isbn})")
        results = [_with_confidence(value) for value in slots if value is not None]
        logger.info("ISBN %s: %d result(s)", isbn, len(results))
        return results

    def get_best_metadata_by_isbn(self, isbn: str | None) -> BookMetadata | None:
        """Return the single highest-confidence match for an ISBN.

        Ties on confidence go to the higher-priority (lower-numbered) provider,
        which is simply the earlier entry in the priority-ordered list.
        """
        candidates = self.find_by_isbn_from_all_providers(isbn)
        if not candidates:
            return None
        best = candidates[0]
        for candidate in candidates[1:]:
            if candidate.confidence > best.confidence:
                best = candidate
        return best

    def get_merged_metadata_by_isbn(self, isbn: str | None) -> BookMetadata | None:
        """Look up an ISBN everywhere and merge the matches into one record."""
        candidates = self.find_by_isbn_from_all_providers(isbn)
        if not candidates:
            return None
        return self.merge_metadata(candidates)

    def search_by_title_from_all_providers(
        self, title: str | None, author: str | None = None
    ) -> list[BookMetadata]:
        """Search every enabled provider by title and optional author.

        Each provider's candidates stay together and in that provider's own
        order; provider groups are ordered by ascending priority. Each
        candidate keeps its own confidence for callers that want to re-rank.
        """
        if not title or not title.strip():
            logger.debug("Blank title; skipping provider search")
            return []

        slots = self._collect(
            lambda p: p.search_by_title(title, author), f"search_by_title({title!r})"
        )
        results = [
            _with_confidence(candidate)
            for group in slots
            if group
            for candidate in group
        ]
        logger.info("Title %r author %r: %d result(s)", title, author, len(results))
        return results

    def find_by_provider_id(
        self, provider_id: str, provider_specific_id: str | None
    ) -> BookMetadata | None:
        """Direct lookup on one named provider using that provider's own id scheme.

        Returns None if the id is blank, no enabled provider has that id, or
        the provider fails. When the id is registered more than once the
        highest-priority entry answers.
        """
        if not provider_specific_id or not provider_specific_id.strip():
            return None
        matching = [p for p in self._registry.enabled_providers() if p.provider_id == provider_id]
        if not matching:
            logger.warning("No enabled provider with id %r", provider_id)
            return None

        provider = matching[0]
        slot = fan_out(
            [provider],
            lambda p: p.find_by_provider_id(provider_specific_id),
            timeout=self._timeout,
            label=f"find_by_provider_id({provider_specific_id})",
        )[0]
        if not slot.ok or slot.value is None:
            return None
        return _with_confidence(slot.value)

    def add_resource(self, resource: Closeable) -> None:
        """Hand over something (usually an HTTP client) to be released by close()."""
        self._resources.append(resource)

    def close(self) -> None:
        """Release every resource handed over with add_resource. Safe to call twice."""
        resources, self._resources = self._resources, []
        for resource in resources:
            resource.close()
        if resources:
            logger.debug("Closed %d aggregator resource(s)", len(resources))

    def merge_metadata(self, candidates: Sequence[BookMetadata]) -> BookMetadata:
        """Merge candidates into one record; see bookmeta.metadata.merge.merge_metadata."""
        return merge_metadata(candidates)

    def test_all_providers(self) -> list[ProviderStatus]:
        """Probe every registered provider, enabled or not."""
        return probe_providers(self._registry.all_providers(), timeout=self._timeout)

    def _collect(self, call: Callable[[MetadataProvider], T], label: str) -> list[T]:
        """Fan a call out to enabled providers; return successful values in priority order.

        Failed and timed-out providers are dropped (fan_out has already logged
        them). Values may be None or empty; callers filter those.
        """
        providers = self._registry.enabled_providers()
        if not providers:
            logger.warning("No metadata providers enabled; %s returns nothing", label)
            return []

        slots = fan_out(
            providers,
            call,
            timeout=self._timeout,
            max_workers=self._max_workers,
            label=label,
        )
        return [slot.value for slot in slots if slot.ok]
