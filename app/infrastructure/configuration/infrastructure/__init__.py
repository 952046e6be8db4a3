"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.delivery import (
    BotSettings,
    DeliverySettings,
)

__all__ = [
    "BotSettings",
    "DeliverySettings",
]
