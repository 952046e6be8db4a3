"""Channel registry, notification routing and message delivery.

Usage:
    from infrastructure.notifications import (
        ChannelRegistry,
        DeliveryOrchestrator,
        NotificationRouter,
    )

    registry = ChannelRegistry.from_bindings(channels)
    router = NotificationRouter(registry)
    orchestrator = DeliveryOrchestrator(adapter, max_message_size=3001)

    targets = router.targets(event, source_bindings=["k8s-events"])
    orchestrator.deliver(targets, message).raise_for_failures()
"""

from infrastructure.notifications.adapters import MessageDeliveryAdapter
from infrastructure.notifications.delivery import DeliveryOrchestrator
from infrastructure.notifications.models import (
    Body,
    Button,
    DeliveryFailure,
    DeliveryReport,
    DeliveryTarget,
    InteractiveMessage,
    LabelInput,
    MessageType,
    OptionItem,
    Section,
    Select,
    TextField,
)
from infrastructure.notifications.ports import (
    AnalyticsReporter,
    CommandExecutor,
    Conversation,
    LoggingAnalyticsReporter,
    NotifierHandler,
)
from infrastructure.notifications.registry import ChannelConfig, ChannelRegistry
from infrastructure.notifications.router import NotificationRouter

__all__ = [
    "AnalyticsReporter",
    "Body",
    "Button",
    "ChannelConfig",
    "ChannelRegistry",
    "CommandExecutor",
    "Conversation",
    "DeliveryFailure",
    "DeliveryOrchestrator",
    "DeliveryReport",
    "DeliveryTarget",
    "InteractiveMessage",
    "LabelInput",
    "LoggingAnalyticsReporter",
    "MessageDeliveryAdapter",
    "MessageType",
    "NotificationRouter",
    "NotifierHandler",
    "OptionItem",
    "Section",
    "Select",
    "TextField",
]
