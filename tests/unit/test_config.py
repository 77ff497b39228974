# ABOUTME: Unit tests for Settings and BOOKMETA_* environment parsing.
# ABOUTME: Covers defaults, env overrides, malformed values, and CLI-style overrides.

import pytest

from bookmeta.config import Settings, parse_provider_list


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.request_timeout == 10.0
        assert settings.aggregate_timeout is None
        assert settings.google_api_key is None
        assert settings.disabled_providers == frozenset()
        assert settings.google_books_priority < settings.open_library_priority

    def test_from_empty_env_is_defaults(self) -> None:
        assert Settings.from_env({}) == Settings()

    def test_from_env_reads_bookmeta_vars(self) -> None:
        settings = Settings.from_env(
            {
                "BOOKMETA_REQUEST_TIMEOUT": "5",
                "BOOKMETA_AGGREGATE_TIMEOUT": "2.5",
                "BOOKMETA_GOOGLE_API_KEY": " key123 ",
                "BOOKMETA_DISABLED_PROVIDERS": "open-library",
                "UNRELATED": "ignored",
            }
        )
        assert settings.request_timeout == 5.0
        assert settings.aggregate_timeout == 2.5
        assert settings.google_api_key == "key123"
        assert settings.disabled_providers == {"open-library"}

    def test_blank_values_ignored(self) -> None:
        settings = Settings.from_env(
            {"BOOKMETA_REQUEST_TIMEOUT": " ", "BOOKMETA_GOOGLE_API_KEY": ""}
        )
        assert settings == Settings()

    def test_malformed_number_raises(self) -> None:
        with pytest.raises(ValueError, match="BOOKMETA_AGGREGATE_TIMEOUT must be a number"):
            Settings.from_env({"BOOKMETA_AGGREGATE_TIMEOUT": "soon"})

    def test_from_env_uses_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOKMETA_GOOGLE_API_KEY", "from-os")
        assert Settings.from_env().google_api_key == "from-os"

    def test_with_overrides_skips_none(self) -> None:
        base = Settings(google_api_key="keep")
        updated = base.with_overrides(google_api_key=None, aggregate_timeout=3.0)
        assert updated.google_api_key == "keep"
        assert updated.aggregate_timeout == 3.0
        assert base.aggregate_timeout is None

    def test_is_enabled(self) -> None:
        settings = Settings(disabled_providers=frozenset({"google-books"}))
        assert not settings.is_enabled("google-books")
        assert settings.is_enabled("open-library")


class TestParseProviderList:
    """Tests for parse_provider_list."""

    def test_splits_and_trims(self) -> None:
        assert parse_provider_list(" google-books , open-library,,") == {
            "google-books",
            "open-library",
        }

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty(self, raw: str | None) -> None:
        assert parse_provider_list(raw) == frozenset()
