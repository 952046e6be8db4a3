"""Notification routing.

Decides which channels receive an event:

1. an explicit ``event.channel`` wins and bypasses every other check
2. otherwise a channel is targeted when its notifications are enabled and it
   is bound to at least one of the sources that produced the event
"""

from typing import Iterable, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger
from infrastructure.notifications.registry import ChannelRegistry

logger = get_module_logger()


class NotificationRouter:
    """Computes delivery targets from the channel registry."""

    def __init__(self, registry: ChannelRegistry):
        self.registry = registry

    def targets(self, event: Event, source_bindings: Iterable[str]) -> List[str]:
        """Channels to notify about ``event``.

        Args:
            event: event to route
            source_bindings: names of the sources that produced the event

        Returns:
            channel identifiers sorted by identity
        """
        if event.channel:
            return [event.channel]

        return self.targets_for_bindings(source_bindings)

    def targets_for_bindings(self, source_bindings: Iterable[str]) -> List[str]:
        """Enabled channels bound to any of ``source_bindings``."""
        wanted = set(source_bindings)
        out = []
        for channel in self.registry.get().values():
            if not channel.notify:
                logger.info(
                    "notifications_disabled_for_channel",
                    channel=channel.identifier,
                )
                continue

            if wanted.isdisjoint(channel.source_bindings):
                continue

            out.append(channel.identifier)

        return sorted(out)
