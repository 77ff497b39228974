# ABOUTME: Explicit startup wiring that builds the default providers and registers them.
# ABOUTME: No discovery: each concrete provider is constructed and registered here, in order.

import logging

from bookmeta.config import Settings
from bookmeta.metadata import googlebooks, openlibrary
from bookmeta.metadata.aggregator import MetadataAggregator
from bookmeta.metadata.googlebooks import GoogleBooksProvider
from bookmeta.metadata.http import BookmetaHttpClient, HttpClient
from bookmeta.metadata.openlibrary import OpenLibraryProvider

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> BookmetaHttpClient:
    """Create an HTTP client configured from settings (one per provider)."""
    return BookmetaHttpClient(
        timeout=settings.request_timeout,
        min_request_interval=settings.min_request_interval,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )


def build_aggregator(
    settings: Settings | None = None, *, http_client: HttpClient | None = None
) -> MetadataAggregator:
    """Build an aggregator with Google Books and Open Library registered.

    Providers listed in ``settings.disabled_providers`` are still registered
    (so the prober reports them) but with enabled=False. Each provider gets its
    own HTTP client, and so its own rate limiter, unless ``http_client`` is given.
    Clients created here belong to the aggregator and are released by its
    close(); a caller-supplied ``http_client`` stays the caller's to close.
    """
    settings = settings or Settings()
    aggregator = MetadataAggregator(timeout=settings.aggregate_timeout)

    def client() -> HttpClient:
        if http_client is not None:
            return http_client
        created = create_http_client(settings)
        aggregator.add_resource(created)
        return created

    logger.info("Registering metadata providers...")
    aggregator.register_provider(
        GoogleBooksProvider(
            client(),
            api_key=settings.google_api_key,
            enabled=settings.is_enabled(googlebooks.PROVIDER_ID),
            priority=settings.google_books_priority,
        )
    )
    aggregator.register_provider(
        OpenLibraryProvider(
            client(),
            enabled=settings.is_enabled(openlibrary.PROVIDER_ID),
            priority=settings.open_library_priority,
        )
    )
    return aggregator
