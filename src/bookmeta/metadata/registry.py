# ABOUTME: Append-only registry of metadata providers shared by the aggregator and prober.
# ABOUTME: Writes swap in a new immutable tuple under a lock so reads never block.

import logging
import threading
from collections.abc import Iterator

from bookmeta.metadata.provider import MetadataProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Ordered collection of registered providers.

    Registration is rare (usually once at startup) while reads happen on every
    query. Each write publishes a fresh tuple; readers grab whatever tuple is
    current without locking. Nothing is ever removed and no de-duplication is
    done: registering the same provider id twice yields two entries.
    """

    def __init__(self) -> None:
        self._providers: tuple[MetadataProvider, ...] = ()
        self._write_lock = threading.Lock()

    def register(self, provider: MetadataProvider) -> None:
        with self._write_lock:
            if any(p.provider_id == provider.provider_id for p in self._providers):
                logger.warning(
                    "Provider id %r registered more than once; both entries will be queried",
                    provider.provider_id,
                )
            self._providers = (*self._providers, provider)

    def all_providers(self) -> list[MetadataProvider]:
        """Snapshot of every registered provider, in registration order."""
        return list(self._providers)

    def enabled_providers(self) -> list[MetadataProvider]:
        """Enabled providers sorted by ascending priority.

        The sort is stable, so equal priorities keep registration order.
        """
        snapshot = self._providers
        return sorted((p for p in snapshot if p.enabled), key=lambda p: p.priority)

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[MetadataProvider]:
        return iter(self._providers)
