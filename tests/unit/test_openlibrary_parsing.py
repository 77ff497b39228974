# ABOUTME: Unit tests for Open Library API response parsing functions.
# ABOUTME: Validates conversion from OL JSON structures to BookMetadata and the OL confidence score.

from datetime import date

import pytest

from bookmeta.metadata.errors import MetadataParseError
from bookmeta.metadata.openlibrary_parser import (
    build_cover_url,
    parse_books_api_entry,
    parse_search_doc,
    parse_search_results,
    score_openlibrary,
)
from bookmeta.metadata.types import BookMetadata
from tests.fixtures.openlibrary_responses import (
    BOOKS_API_ENTRY,
    BOOKS_API_MINIMAL_ENTRY,
    SEARCH_RESPONSE,
    SEARCH_RESPONSE_EMPTY,
)


class TestParseBooksApiEntry:
    """Tests for parse_books_api_entry."""

    def test_extracts_title_and_subtitle(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.title == "The Name of the Rose"
        assert meta.subtitle == "including the Author's Postscript"

    def test_extracts_publisher_name(self) -> None:
        """First publisher object's name is used."""
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.publisher == "Harcourt"

    def test_extracts_both_isbns(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.isbn_13 == "9780156001311"
        assert meta.isbn_10 == "0156001314"

    def test_extracts_authors(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.author == "Umberto Eco"
        assert meta.authors[0].role == "author"

    def test_extracts_publication_date(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.publication_date == date(1994, 3, 5)
        assert meta.publication_year == 1994

    def test_extracts_external_identifiers(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.open_library_id == "OL7353617M"
        assert meta.goodreads_id == "119073"
        assert meta.asin == "0156001314"
        assert meta.lccn == "83012941"
        assert meta.oclc == "9323627"

    def test_extracts_classifications(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.dewey_decimal == "853/.914"
        assert meta.lcc == "PQ4865.C6 N6513 1983"

    def test_extracts_subjects_and_physical(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.subjects == {"Mystery", "Historical fiction"}
        assert meta.page_count == 512
        assert meta.weight == "1.2 pounds"

    def test_maps_cover_sizes(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_ENTRY)
        assert meta.small_thumbnail.endswith("-S.jpg")
        assert meta.thumbnail.endswith("-M.jpg")
        assert meta.large_image.endswith("-L.jpg")
        assert meta.best_cover == meta.large_image

    def test_bare_year_publish_date(self) -> None:
        meta = parse_books_api_entry(BOOKS_API_MINIMAL_ENTRY)
        assert meta.publication_date is None
        assert meta.publication_year == 1901

    def test_missing_fields_handled(self) -> None:
        """Minimal entry doesn't crash."""
        meta = parse_books_api_entry({"title": "Bare Minimum"})
        assert meta.title == "Bare Minimum"
        assert meta.isbn is None
        assert meta.publisher is None
        assert meta.authors == ()

    def test_non_object_raises(self) -> None:
        with pytest.raises(MetadataParseError):
            parse_books_api_entry(["not", "a", "dict"])  # type: ignore[arg-type]


class TestParseSearchResults:
    """Tests for parse_search_results and parse_search_doc."""

    def test_parses_all_docs_in_order(self) -> None:
        results = parse_search_results(SEARCH_RESPONSE)
        assert [r.open_library_id for r in results] == ["OL456W", "OL789W"]

    def test_doc_fields(self) -> None:
        meta = parse_search_doc(SEARCH_RESPONSE["docs"][0])
        assert meta.title == "The Name of the Rose"
        assert meta.isbn_13 == "9780156001311"
        assert meta.language == "eng"
        assert meta.page_count == 536
        assert meta.goodreads_id == "119073"
        assert meta.subjects == {"Mystery", "Monasteries"}

    def test_first_publish_year_sets_year_only(self) -> None:
        meta = parse_search_doc(SEARCH_RESPONSE["docs"][0])
        assert meta.publication_year == 1980
        assert meta.publication_date is None

    def test_cover_id_builds_urls(self) -> None:
        meta = parse_search_doc(SEARCH_RESPONSE["docs"][0])
        assert meta.large_image == "https://covers.openlibrary.org/b/id/240727-L.jpg"

    def test_no_cover_id(self) -> None:
        meta = parse_search_doc(SEARCH_RESPONSE["docs"][1])
        assert meta.best_cover is None

    def test_empty_results(self) -> None:
        assert parse_search_results(SEARCH_RESPONSE_EMPTY) == []

    def test_docs_not_a_list_raises(self) -> None:
        with pytest.raises(MetadataParseError):
            parse_search_results({"docs": "oops"})


class TestBuildCoverUrl:
    """Tests for build_cover_url."""

    def test_default_size_is_large(self) -> None:
        assert build_cover_url(12345) == "https://covers.openlibrary.org/b/id/12345-L.jpg"

    def test_small_size(self) -> None:
        assert build_cover_url(12345, "S").endswith("12345-S.jpg")


class TestScoreOpenLibrary:
    """Tests for the Open Library completeness confidence."""

    def test_empty_record_gets_base(self) -> None:
        assert score_openlibrary(BookMetadata()) == 0.5

    def test_fully_populated_record_is_capped(self) -> None:
        assert score_openlibrary(parse_books_api_entry(BOOKS_API_ENTRY)) == 1.0

    def test_title_and_authors_only(self) -> None:
        meta = parse_search_doc(SEARCH_RESPONSE["docs"][1])
        assert score_openlibrary(meta) == pytest.approx(0.7)


class TestMalformedPayloads:
    """Null or wrongly typed fields are treated as missing, never as a provider failure."""

    @pytest.mark.parametrize(
        "field", ["isbn", "author_name", "subject", "language", "publisher", "cover_i"]
    )
    def test_search_doc_null_field(self, field: str) -> None:
        doc = dict(SEARCH_RESPONSE["docs"][0], **{field: None})
        meta = parse_search_doc(doc)
        assert meta.title == SEARCH_RESPONSE["docs"][0]["title"]

    def test_search_doc_nulls_give_empty_values(self) -> None:
        meta = parse_search_doc({"title": "T", "isbn": None, "author_name": None, "subject": None})
        assert meta.title == "T"
        assert meta.isbn is None
        assert meta.authors == ()
        assert meta.subjects == frozenset()

    def test_search_doc_skips_non_string_entries(self) -> None:
        doc = {
            "title": "T",
            "isbn": [None, 9780156001311, "0156001314"],
            "author_name": [None, "Eco"],
        }
        meta = parse_search_doc(doc)
        assert meta.isbn_10 == "0156001314"
        assert meta.isbn_13 is None
        assert [a.name for a in meta.authors] == ["Eco"]

    @pytest.mark.parametrize(
        "field", ["authors", "subjects", "identifiers", "classifications", "cover", "publishers"]
    )
    def test_books_entry_null_field(self, field: str) -> None:
        entry = dict(BOOKS_API_ENTRY, **{field: None})
        meta = parse_books_api_entry(entry)
        assert meta.title == BOOKS_API_ENTRY["title"]

    def test_books_entry_null_identifier_lists(self) -> None:
        entry = {"title": "T", "identifiers": {"isbn_13": None, "isbn_10": ["0156001314"]}}
        meta = parse_books_api_entry(entry)
        assert meta.isbn_10 == "0156001314"
        assert meta.isbn_13 is None

    def test_books_entry_unconvertible_field_raises_parse_error(self) -> None:
        with pytest.raises(MetadataParseError):
            parse_books_api_entry({"title": "T", "key": "/books/OL1M", "publish_date": 1901})

    def test_search_results_null_docs_is_empty(self) -> None:
        assert parse_search_results({"docs": None}) == []

    def test_search_results_keep_good_docs_beside_bad(self) -> None:
        data = {"docs": [{"title": "T", "isbn": None}, "junk", SEARCH_RESPONSE["docs"][1]]}
        assert [m.title for m in parse_search_results(data)] == [
            "T",
            SEARCH_RESPONSE["docs"][1]["title"],
        ]
