# ABOUTME: Runtime settings for the metadata engine: timeouts, HTTP pacing, keys, provider toggles.
# ABOUTME: Defaults live here; BOOKMETA_* environment variables and CLI options override them.

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

ENV_PREFIX = "BOOKMETA_"


def _parse_float(environ: Mapping[str, str], name: str) -> float | None:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc


def parse_provider_list(raw: str | None) -> frozenset[str]:
    """Split a comma-separated provider id list ("google-books, open-library")."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Settings for building providers and the aggregator.

    Attributes:
        request_timeout: Per-HTTP-request timeout in seconds, enforced by each adapter.
        aggregate_timeout: Deadline for a whole fan-out, or None to wait for all providers.
        min_request_interval: Minimum spacing between requests to the same API.
        max_retries: Retries for transient HTTP failures (429, 5xx).
        retry_delay: Initial backoff delay, doubled per retry.
        google_api_key: Optional Google Books API key.
        disabled_providers: Provider ids to register as disabled.
        google_books_priority: Priority of the Google Books provider.
        open_library_priority: Priority of the Open Library provider.
    """

    request_timeout: float = 10.0
    aggregate_timeout: float | None = None
    min_request_interval: float = 0.1
    max_retries: int = 2
    retry_delay: float = 1.0
    google_api_key: str | None = None
    disabled_providers: frozenset[str] = field(default_factory=frozenset)
    google_books_priority: int = 1
    open_library_priority: int = 2

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from BOOKMETA_* environment variables.

        Recognized: BOOKMETA_REQUEST_TIMEOUT, BOOKMETA_AGGREGATE_TIMEOUT,
        BOOKMETA_GOOGLE_API_KEY, BOOKMETA_DISABLED_PROVIDERS (comma-separated).

        Raises:
            ValueError: If a numeric variable is not a number.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        request_timeout = _parse_float(env, "REQUEST_TIMEOUT")
        if request_timeout is not None:
            values["request_timeout"] = request_timeout

        aggregate_timeout = _parse_float(env, "AGGREGATE_TIMEOUT")
        if aggregate_timeout is not None:
            values["aggregate_timeout"] = aggregate_timeout

        api_key = env.get(ENV_PREFIX + "GOOGLE_API_KEY", "").strip()
        if api_key:
            values["google_api_key"] = api_key

        disabled = parse_provider_list(env.get(ENV_PREFIX + "DISABLED_PROVIDERS"))
        if disabled:
            values["disabled_providers"] = disabled

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def is_enabled(self, provider_id: str) -> bool:
        return provider_id not in self.disabled_providers
