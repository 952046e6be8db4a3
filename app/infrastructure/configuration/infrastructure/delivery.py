"""Delivery and inbound processing settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class DeliverySettings(InfrastructureSettings):
    """Fan-out limits for message delivery.

    Environment Variables:
        DELIVERY_MAX_WORKERS: Maximum concurrent per-channel deliveries

    Example:
        ```python
        from infrastructure.configuration import settings

        workers = settings.delivery.DELIVERY_MAX_WORKERS
        ```
    """

    DELIVERY_MAX_WORKERS: int = Field(default=4, ge=1)


class BotSettings(InfrastructureSettings):
    """Bot runtime configuration.

    Environment Variables:
        BOT_CONFIG_PATH: YAML file with sources, executors and communications
        CLUSTER_NAME: Cluster name shown in notifications and notifier replies
        INBOUND_QUEUE_SIZE: Capacity of the inbound message queue
        INBOUND_WORKERS: Number of consumer threads draining the queue
    """

    BOT_CONFIG_PATH: str = "config.yaml"
    CLUSTER_NAME: str = "default"
    INBOUND_QUEUE_SIZE: int = Field(default=100, ge=1)
    INBOUND_WORKERS: int = Field(default=2, ge=1)
