# ABOUTME: Exception hierarchy for metadata provider failures.
# ABOUTME: Adapters raise these; the aggregator and prober turn them into empty results or statuses.


class ProviderError(Exception):
    """Base class for failures inside a metadata provider adapter."""


class MetadataFetchError(ProviderError):
    """Raised when an HTTP request to a metadata provider fails.

    Attributes:
        status_code: The HTTP status of the failing response, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MetadataParseError(ProviderError):
    """Raised when a provider response cannot be turned into BookMetadata."""


class ProbeError(ProviderError):
    """Raised by test_connection for configuration faults (e.g. a rejected API key)."""
