"""Unit tests for cluster event models."""

import pytest

from infrastructure.events.models import Event, EventType, Level


@pytest.mark.unit
class TestEventLevel:
    @pytest.mark.parametrize(
        "event_type,level",
        [
            (EventType.CREATE, Level.INFO),
            (EventType.UPDATE, Level.WARN),
            (EventType.DELETE, Level.CRITICAL),
            (EventType.ERROR, Level.ERROR),
            (EventType.WARNING, Level.ERROR),
            (EventType.INFO, Level.INFO),
        ],
    )
    def test_level_follows_type(self, event_type, level):
        assert Event(type=event_type, cluster="dev").level == level


@pytest.mark.unit
class TestForResource:
    def test_created_title(self):
        event = Event.for_resource(EventType.CREATE, "v1/pods", cluster="dev", name="nginx")

        assert event.title == "v1/pods created"
        assert event.resource == "v1/pods"

    def test_warning_title_uses_bare_type(self):
        event = Event.for_resource(EventType.WARNING, "v1/pods", cluster="dev")

        assert event.title == "v1/pods warning"

    def test_explicit_title_wins(self):
        event = Event.for_resource(EventType.UPDATE, "v1/pods", cluster="dev", title="custom")

        assert event.title == "custom"


@pytest.mark.unit
class TestEventSummary:
    def test_namespaced(self):
        event = Event(type=EventType.CREATE, cluster="dev", kind="Pod", name="nginx", namespace="web")

        assert event.summary() == "Pod web/nginx"

    def test_cluster_scoped(self):
        event = Event(type=EventType.CREATE, cluster="dev", resource="v1/nodes", name="node-1")

        assert event.summary() == "v1/nodes node-1"

    def test_without_name(self):
        assert Event(type=EventType.INFO, cluster="dev").summary() is None

    def test_recommendations_or_warnings(self):
        assert not Event(type=EventType.INFO, cluster="dev").has_recommendations_or_warnings
        assert Event(
            type=EventType.INFO, cluster="dev", warnings=("no limits",)
        ).has_recommendations_or_warnings
