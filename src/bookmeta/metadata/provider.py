# ABOUTME: MetadataProvider protocol defining the contract for metadata sources.
# ABOUTME: Any external metadata API (Open Library, Google Books, etc.) implements this.

from typing import Protocol, runtime_checkable

from bookmeta.metadata.types import BookMetadata


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for metadata lookup services.

    The identity accessors (provider_id, provider_name, enabled, priority) are
    pure and must never fail. Data operations return None or an empty list when
    nothing matches, and adapters are expected to turn network and parse
    failures into empty results as well. Lower priority numbers win; 0 is the
    highest priority.

    test_connection returns False for ordinary connectivity failures and may
    raise ProbeError for configuration faults.
    """

    @property
    def provider_id(self) -> str: ...

    @property
    def provider_name(self) -> str: ...

    @property
    def enabled(self) -> bool: ...

    @property
    def priority(self) -> int: ...

    def find_by_isbn(self, isbn: str) -> BookMetadata | None: ...

    def search_by_title(self, title: str, author: str | None = None) -> list[BookMetadata]: ...

    def find_by_provider_id(self, provider_specific_id: str) -> BookMetadata | None: ...

    def test_connection(self) -> bool: ...
