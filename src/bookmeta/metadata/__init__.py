# ABOUTME: Metadata package: provider contract, adapters, registry, aggregator and merge reducer.
# ABOUTME: Exports the value types and entry points used by the CLI and by embedding applications.

from bookmeta.metadata.aggregator import MetadataAggregator
from bookmeta.metadata.bootstrap import build_aggregator
from bookmeta.metadata.errors import MetadataFetchError, ProbeError, ProviderError
from bookmeta.metadata.merge import merge_metadata
from bookmeta.metadata.provider import MetadataProvider
from bookmeta.metadata.registry import ProviderRegistry
from bookmeta.metadata.types import AuthorMetadata, BookMetadata, ProviderStatus

__all__ = [
    "AuthorMetadata",
    "BookMetadata",
    "MetadataAggregator",
    "MetadataFetchError",
    "MetadataProvider",
    "ProbeError",
    "ProviderError",
    "ProviderRegistry",
    "ProviderStatus",
    "build_aggregator",
    "merge_metadata",
]
