"""
Tests for Provider, the deferred value used for artifact selection.
"""

import threading

from bugsweep.shared.domain.provider import Provider


class TestProvider:

    def test_factory_runs_on_first_get_only(self):
        calls = []
        provider = Provider(lambda: calls.append("scan") or len(calls))

        assert not provider.is_resolved
        assert calls == []
        assert provider.get() == 1
        assert provider.get() == 1
        assert calls == ["scan"]
        assert provider.is_resolved

    def test_of_wraps_a_value(self):
        provider = Provider.of("ready")
        assert provider.get() == "ready"

    def test_concurrent_get_runs_factory_once(self):
        calls = []
        gate = threading.Event()

        def factory():
            gate.wait(1)
            calls.append(1)
            return object()

        provider = Provider(factory)
        results = []
        threads = [threading.Thread(target=lambda: results.append(provider.get())) for _ in range(8)]
        for thread in threads:
            thread.start()
        gate.set()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len({id(r) for r in results}) == 1

    def test_repr_shows_state(self):
        provider = Provider(lambda: 1)
        assert repr(provider) == "Provider(pending)"
        provider.get()
        assert repr(provider) == "Provider(resolved)"
