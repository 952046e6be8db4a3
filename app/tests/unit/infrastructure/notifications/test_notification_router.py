"""Unit tests for notification routing."""

import pytest

from infrastructure.events.models import Event, EventType
from infrastructure.notifications.router import NotificationRouter


def _event(channel: str = "") -> Event:
    return Event.for_resource(EventType.CREATE, "v1/pods", cluster="dev", channel=channel)


@pytest.mark.unit
class TestNotificationRouter:
    def test_explicit_channel_wins(self, registry_factory, channel_factory):
        registry = registry_factory(channel_factory("A"), channel_factory("B", notify=False))
        router = NotificationRouter(registry)

        assert router.targets(_event(channel="X"), ["k8s-events"]) == ["X"]

    def test_explicit_channel_ignores_notify_flag(self, registry_factory, channel_factory):
        registry = registry_factory(channel_factory("B", notify=False))
        router = NotificationRouter(registry)

        assert router.targets(_event(channel="B"), []) == ["B"]

    def test_disabled_channel_is_skipped(self, registry_factory, channel_factory):
        registry = registry_factory(
            channel_factory("A", sources=("k8s-events",)),
            channel_factory("B", notify=False, sources=("k8s-events",)),
        )
        router = NotificationRouter(registry)

        assert router.targets(_event(), ["k8s-events"]) == ["A"]

    def test_requires_binding_intersection(self, registry_factory, channel_factory):
        registry = registry_factory(
            channel_factory("A", sources=("k8s-events",)),
            channel_factory("B", sources=("prometheus",)),
            channel_factory("C", sources=("prometheus", "k8s-events")),
        )
        router = NotificationRouter(registry)

        assert router.targets(_event(), ["k8s-events", "other"]) == ["A", "C"]

    def test_result_is_sorted(self, registry_factory, channel_factory):
        registry = registry_factory(
            channel_factory("zeta"), channel_factory("alpha"), channel_factory("mid")
        )
        router = NotificationRouter(registry)

        assert router.targets_for_bindings(["k8s-events"]) == ["alpha", "mid", "zeta"]

    def test_no_bindings_no_targets(self, registry_factory, channel_factory):
        router = NotificationRouter(registry_factory(channel_factory("A")))

        assert router.targets(_event(), []) == []

    def test_toggle_is_seen_by_next_routing(self, registry_factory, channel_factory):
        registry = registry_factory(channel_factory("A"))
        router = NotificationRouter(registry)

        registry.set_notify("A", False)

        assert router.targets_for_bindings(["k8s-events"]) == []
