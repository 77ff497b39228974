# ABOUTME: Unit tests for ProviderRegistry.
# ABOUTME: Covers registration order, priority sorting, duplicate ids, and concurrent registration.

import logging
import threading
from typing import Any

from bookmeta.metadata.registry import ProviderRegistry
from tests.fixtures.providers import FakeProvider


class TestProviderRegistry:
    """Tests for ProviderRegistry."""

    def test_starts_empty(self, registry: ProviderRegistry) -> None:
        assert len(registry) == 0
        assert registry.all_providers() == []
        assert registry.enabled_providers() == []

    def test_all_providers_in_registration_order(self, registry: ProviderRegistry) -> None:
        a = FakeProvider("a", priority=5)
        b = FakeProvider("b", priority=1, enabled=False)
        registry.register(a)
        registry.register(b)
        assert registry.all_providers() == [a, b]
        assert list(registry) == [a, b]

    def test_enabled_providers_sorted_by_priority(self, registry: ProviderRegistry) -> None:
        low = FakeProvider("low", priority=3)
        high = FakeProvider("high", priority=1)
        off = FakeProvider("off", priority=0, enabled=False)
        for provider in (low, off, high):
            registry.register(provider)
        assert registry.enabled_providers() == [high, low]

    def test_equal_priority_keeps_registration_order(self, registry: ProviderRegistry) -> None:
        first = FakeProvider("first", priority=1)
        second = FakeProvider("second", priority=1)
        registry.register(first)
        registry.register(second)
        assert registry.enabled_providers() == [first, second]

    def test_duplicate_ids_kept_with_warning(self, registry: ProviderRegistry, caplog: Any) -> None:
        registry.register(FakeProvider("dup", priority=1))
        with caplog.at_level(logging.WARNING):
            registry.register(FakeProvider("dup", priority=2))
        assert len(registry) == 2
        assert "registered more than once" in caplog.text

    def test_snapshot_not_affected_by_later_registration(self, registry: ProviderRegistry) -> None:
        registry.register(FakeProvider("a"))
        snapshot = registry.all_providers()
        registry.register(FakeProvider("b"))
        assert len(snapshot) == 1
        assert len(registry) == 2

    def test_concurrent_registration_loses_nothing(self, registry: ProviderRegistry) -> None:
        providers = [FakeProvider(f"p{i}", priority=i) for i in range(50)]
        threads = [threading.Thread(target=registry.register, args=(p,)) for p in providers]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry) == 50
        assert [p.provider_id for p in registry.enabled_providers()] == [
            f"p{i}" for i in range(50)
        ]
