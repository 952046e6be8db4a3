"""Cluster event model consumed by notification routing.

Events are produced by the cluster watcher (an external collaborator) and
are never mutated by the bot.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class EventType(str, Enum):
    """Kind of change reported for a watched object."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Level(str, Enum):
    """Severity shown alongside the notification."""

    INFO = "info"
    WARN = "warn"
    DEBUG = "debug"
    ERROR = "error"
    CRITICAL = "critical"


LEVEL_MAP = {
    EventType.CREATE: Level.INFO,
    EventType.UPDATE: Level.WARN,
    EventType.DELETE: Level.CRITICAL,
    EventType.ERROR: Level.ERROR,
    EventType.WARNING: Level.ERROR,
    EventType.INFO: Level.INFO,
}


@dataclass(frozen=True)
class Action:
    """Automated command offered for an event.

    Attributes:
        command: command line, prefixed with the bot name
        executor_bindings: executors allowed to run it
        display_name: label shown to users
    """

    command: str
    executor_bindings: Tuple[str, ...] = ()
    display_name: str = ""


@dataclass(frozen=True)
class Event:
    """Immutable cluster event.

    ``level`` is derived from ``type`` through LEVEL_MAP. A non-empty
    ``channel`` routes the event to that channel only.
    """

    type: EventType
    cluster: str
    kind: str = ""
    name: str = ""
    namespace: str = ""
    resource: str = ""
    reason: str = ""
    title: str = ""
    channel: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    messages: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    actions: Tuple[Action, ...] = ()

    @property
    def level(self) -> Level:
        return LEVEL_MAP[self.type]

    @property
    def has_recommendations_or_warnings(self) -> bool:
        return bool(self.recommendations) or bool(self.warnings)

    @classmethod
    def for_resource(
        cls,
        event_type: EventType,
        resource: str,
        cluster: str,
        name: str = "",
        namespace: str = "",
        **kwargs,
    ) -> "Event":
        """Build an event with the standard title for ``resource``.

        Create, update and delete titles take a past-tense suffix
        (``v1/pods created``); error, warning and info titles use the bare type.
        """
        if event_type in (EventType.ERROR, EventType.WARNING, EventType.INFO):
            title = f"{resource} {event_type.value}"
        else:
            title = f"{resource} {event_type.value}d"
        return cls(
            type=event_type,
            cluster=cluster,
            resource=resource,
            name=name,
            namespace=namespace,
            title=kwargs.pop("title", None) or title,
            **kwargs,
        )

    def summary(self) -> Optional[str]:
        """One-line description used as the notification body."""
        if not self.name:
            return None
        if self.namespace:
            return f"{self.kind or self.resource} {self.namespace}/{self.name}"
        return f"{self.kind or self.resource} {self.name}"
