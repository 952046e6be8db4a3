"""Platform clients package.

Modules:
    slack: Slack SDK facade implementing MessageDeliveryAdapter
"""

from infrastructure.platforms.clients.slack import SOCKET_SLACK_PLATFORM, SlackClientFacade

__all__ = [
    "SOCKET_SLACK_PLATFORM",
    "SlackClientFacade",
]
