"""Chat platform adapters.

Each platform implements ``MessageDeliveryAdapter`` so routing, resolution
and delivery stay platform-agnostic.
"""

from infrastructure.platforms.clients import SOCKET_SLACK_PLATFORM, SlackClientFacade

__all__ = [
    "SOCKET_SLACK_PLATFORM",
    "SlackClientFacade",
]
