"""Cluster event model."""

from infrastructure.events.models import LEVEL_MAP, Action, Event, EventType, Level

__all__ = [
    "LEVEL_MAP",
    "Action",
    "Event",
    "EventType",
    "Level",
]
