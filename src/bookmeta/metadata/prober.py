# ABOUTME: Connectivity prober that runs every provider's self-test and reports one status each.
# ABOUTME: Disabled providers are probed too; probe failures become statuses, never exceptions.

import logging
from collections.abc import Sequence

from bookmeta.metadata.fanout import fan_out
from bookmeta.metadata.provider import MetadataProvider
from bookmeta.metadata.types import ProviderStatus

logger = logging.getLogger(__name__)


def _probe(provider: MetadataProvider) -> bool:
    return bool(provider.test_connection())


def probe_providers(
    providers: Sequence[MetadataProvider], *, timeout: float | None = None
) -> list[ProviderStatus]:
    """Test every provider's connection concurrently.

    Returns one ProviderStatus per provider, in input order. A probe that
    raises (ProbeError or anything else) is reported as disconnected with the
    exception message; a probe that misses the deadline is reported as
    disconnected with a timeout message.
    """
    statuses: list[ProviderStatus] = []
    for slot in fan_out(providers, _probe, timeout=timeout, label="test_connection"):
        provider = slot.provider
        error: str | None = None
        if slot.timed_out:
            error = f"timed out after {timeout}s"
        elif slot.error is not None:
            error = str(slot.error) or type(slot.error).__name__

        statuses.append(
            ProviderStatus(
                provider_id=provider.provider_id,
                provider_name=provider.provider_name,
                enabled=provider.enabled,
                connected=bool(slot.ok and slot.value),
                error=error,
            )
        )

    connected = sum(1 for s in statuses if s.connected)
    logger.info("Probed %d provider(s): %d connected", len(statuses), connected)
    return statuses
