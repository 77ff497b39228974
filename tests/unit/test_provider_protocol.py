# ABOUTME: Unit tests for MetadataProvider protocol.
# ABOUTME: Validates the protocol contract and runtime_checkable behavior.

from bookmeta.metadata import BookMetadata
from bookmeta.metadata.googlebooks import GoogleBooksProvider
from bookmeta.metadata.openlibrary import OpenLibraryProvider
from bookmeta.metadata.provider import MetadataProvider
from tests.fixtures.providers import FakeHttpClient, FakeProvider


class NotAProvider:
    """Missing required members, so it does not satisfy the protocol."""

    @property
    def provider_id(self) -> str:
        return "broken"

    def find_by_isbn(self, isbn: str) -> BookMetadata | None:
        return None


class TestMetadataProvider:
    """Tests for MetadataProvider protocol."""

    def test_valid_implementation_is_instance(self) -> None:
        """A class with all required members satisfies the protocol."""
        provider = FakeProvider("fake")
        assert isinstance(provider, MetadataProvider)

    def test_invalid_implementation_is_not_instance(self) -> None:
        """A class missing required members does not satisfy the protocol."""
        broken = NotAProvider()
        assert not isinstance(broken, MetadataProvider)

    def test_bundled_adapters_satisfy_protocol(self) -> None:
        http = FakeHttpClient()
        assert isinstance(GoogleBooksProvider(http), MetadataProvider)
        assert isinstance(OpenLibraryProvider(http), MetadataProvider)

    def test_no_match_is_none_not_error(self) -> None:
        provider = FakeProvider("fake")
        assert provider.find_by_isbn("0000000000") is None
        assert provider.search_by_title("Nothing") == []
        assert provider.find_by_provider_id("nope") is None
