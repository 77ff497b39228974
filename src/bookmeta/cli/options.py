# ABOUTME: Shared Click options for bookmeta CLI commands.
# ABOUTME: Provides the provider/timeout option decorator and builds an aggregator from them.

from collections.abc import Callable
from typing import Any

import click

from bookmeta.config import Settings, parse_provider_list
from bookmeta.metadata.aggregator import MetadataAggregator
from bookmeta.metadata.bootstrap import build_aggregator

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=None,
    help="Give up on providers that have not answered after this many seconds.",
)

google_key_option = click.option(
    "--google-api-key",
    envvar="BOOKMETA_GOOGLE_API_KEY",
    default=None,
    help="Google Books API key (env: BOOKMETA_GOOGLE_API_KEY).",
)

disable_option = click.option(
    "--disable",
    "disabled",
    multiple=True,
    metavar="PROVIDER_ID",
    help="Register a provider as disabled (repeatable), e.g. --disable google-books.",
)


def provider_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply the options every provider-backed command accepts."""
    for option in reversed((timeout_option, google_key_option, disable_option)):
        func = option(func)
    return func


def aggregator_from_options(
    timeout: float | None, google_api_key: str | None, disabled: tuple[str, ...]
) -> MetadataAggregator:
    """Build an aggregator from env settings with CLI options layered on top.

    Raises:
        click.BadParameter: If a BOOKMETA_* environment variable is malformed.
    """
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    extra_disabled = parse_provider_list(",".join(disabled))
    settings = settings.with_overrides(
        aggregate_timeout=timeout,
        google_api_key=google_api_key,
        disabled_providers=settings.disabled_providers | extra_disabled,
    )
    return build_aggregator(settings)
