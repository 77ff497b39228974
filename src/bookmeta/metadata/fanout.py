# ABOUTME: Concurrent fan-out of one call across many providers with per-provider fault isolation.
# ABOUTME: Collects result-or-fault per provider into position-indexed slots behind a deadline.

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Generic, TypeVar

from bookmeta.metadata.provider import MetadataProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FanOutResult(Generic[T]):
    """Outcome of one provider's call within a fan-out.

    Exactly one of these holds: ``value`` is set (success, possibly None for
    "no match"), ``error`` is set (the call raised), or ``timed_out`` is True
    (the call had not finished when the deadline passed).
    """

    provider: MetadataProvider
    value: T | None = None
    error: BaseException | None = None
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.timed_out


def fan_out(
    providers: Sequence[MetadataProvider],
    call: Callable[[MetadataProvider], T],
    *,
    timeout: float | None = None,
    max_workers: int | None = None,
    label: str = "call",
) -> list[FanOutResult[T]]:
    """Run ``call(provider)`` for every provider concurrently and wait for all.

    Every call starts at once on its own worker thread. The barrier waits
    until each call has returned, raised, or the deadline has passed. Results
    come back in the same positions as ``providers`` regardless of completion
    order.

    Calls still running at the deadline are reported as timed out. Their
    threads are left to finish on their own and whatever they eventually
    return is discarded.

    Args:
        providers: Providers to call; the output has one slot per entry.
        call: Function invoked with each provider on a worker thread.
        timeout: Seconds to wait for the whole fan-out, or None to wait for all.
        max_workers: Thread cap; defaults to one thread per provider.
        label: Short operation name used in log messages.
    """
    if not providers:
        return []

    workers = max_workers or len(providers)
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bookmeta-fanout")
    started = time.monotonic()
    try:
        futures: list[Future[T]] = [executor.submit(call, provider) for provider in providers]
        done, not_done = wait(futures, timeout=timeout)
    finally:
        # Stragglers keep running in the background; queued calls are dropped.
        executor.shutdown(wait=False, cancel_futures=True)

    slots: list[FanOutResult[T]] = []
    for provider, future in zip(providers, futures, strict=True):
        if future in not_done:
            logger.warning(
                "Provider %s did not finish %s within %.1fs; result discarded",
                provider.provider_id,
                label,
                timeout,
            )
            slots.append(FanOutResult(provider=provider, timed_out=True))
            continue

        exc = future.exception()
        if exc is not None:
            logger.warning(
                "Provider %s failed during %s: %s",
                provider.provider_id,
                label,
                exc,
                exc_info=exc,
            )
            slots.append(FanOutResult(provider=provider, error=exc))
        else:
            slots.append(FanOutResult(provider=provider, value=future.result()))

    logger.debug(
        "Fan-out %s over %d provider(s) finished in %.3fs (%d done)",
        label,
        len(providers),
        time.monotonic() - started,
        len(done),
    )
    return slots
