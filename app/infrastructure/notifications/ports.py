"""Collaborator protocols used by the bot runtime."""

from dataclasses import dataclass
from typing import Protocol, Tuple

import structlog

from infrastructure.interactions.models import CommandOrigin, GenericCommand
from infrastructure.notifications.models import InteractiveMessage

logger = structlog.get_logger()


@dataclass(frozen=True)
class Conversation:
    """Chat context a command is executed in.

    Attributes:
        id: channel identity used for notification toggles
        alias: configured alias of the channel
        platform: integration name (e.g. ``socketSlack``)
        user: requesting user mention
        executor_bindings: executors this channel may invoke
        is_authenticated: True when the channel is declared in the config
        command_origin: how the command was produced
    """

    id: str
    alias: str = ""
    platform: str = ""
    user: str = ""
    executor_bindings: Tuple[str, ...] = ()
    is_authenticated: bool = False
    command_origin: CommandOrigin = CommandOrigin.TYPED


class NotifierHandler(Protocol):
    """Exposed to executors so commands can toggle channel notifications."""

    def notifications_enabled(self, channel_id: str) -> bool: ...

    def set_notifications_enabled(self, channel_id: str, enabled: bool) -> None: ...


class CommandExecutor(Protocol):
    """Runs a resolved command for a conversation and returns the reply."""

    def execute(
        self,
        command: GenericCommand,
        conversation: Conversation,
        handler: NotifierHandler,
    ) -> InteractiveMessage: ...


class AnalyticsReporter(Protocol):
    def report_command(
        self, platform: str, command: str, origin: CommandOrigin, with_filter: bool
    ) -> None: ...


class LoggingAnalyticsReporter:
    """Analytics reporter that only records commands in the structured log."""

    def report_command(
        self, platform: str, command: str, origin: CommandOrigin, with_filter: bool
    ) -> None:
        logger.info(
            "command_reported",
            platform=platform,
            command=command,
            origin=origin.value,
            with_filter=with_filter,
        )
