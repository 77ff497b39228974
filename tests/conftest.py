# ABOUTME: Shared pytest fixtures for bookmeta tests.
# ABOUTME: Provides fake providers, a registry and canned metadata records for testing.

import pytest

from bookmeta.metadata.registry import ProviderRegistry
from bookmeta.metadata.types import AuthorMetadata, BookMetadata
from tests.fixtures.providers import FakeProvider

ISBN = "9780156001311"


@pytest.fixture
def google_record() -> BookMetadata:
    """A rich record as the priority-1 provider would return it."""
    return BookMetadata(
        isbn_13=ISBN,
        title="The Name of the Rose",
        description="A mystery set in a medieval monastery.",
        publisher="Harcourt",
        authors=(AuthorMetadata.author("Umberto Eco"),),
        subjects={"Fiction"},
        google_books_id="zyTCAlFPjgYC",
        provider_id="google-books",
        provider_name="Google Books",
        confidence=0.9,
    )


@pytest.fixture
def openlibrary_record() -> BookMetadata:
    """A sparser record as the priority-2 provider would return it."""
    return BookMetadata(
        isbn_13=ISBN,
        isbn_10="0156001314",
        title="The Name of the Rose",
        page_count=512,
        authors=(
            AuthorMetadata.author("umberto eco"),
            AuthorMetadata.with_role("William Weaver", "translator"),
        ),
        subjects={"Mystery"},
        open_library_id="OL7353617M",
        provider_id="open-library",
        provider_name="Open Library",
        confidence=0.7,
    )


@pytest.fixture
def registry() -> ProviderRegistry:
    """An empty provider registry."""
    return ProviderRegistry()


@pytest.fixture
def two_providers(
    google_record: BookMetadata, openlibrary_record: BookMetadata
) -> tuple[FakeProvider, FakeProvider]:
    """A priority-1 and a priority-2 fake provider that both know ISBN."""
    return (
        FakeProvider("google-books", priority=1, by_isbn={ISBN: google_record}),
        FakeProvider("open-library", priority=2, by_isbn={ISBN: openlibrary_record}),
    )
