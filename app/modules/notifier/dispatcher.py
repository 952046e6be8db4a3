"""Command dispatcher.

Tokenizes a resolved command and routes it by its first word to a
registered command handler. Handler errors meant for the user come back as
the chat reply.

Example:
    dispatcher = CommandDispatcher(platform="socketSlack", analytics=reporter)
    dispatcher.register("notifier", notifier.execute)
    reply = dispatcher.execute(command, conversation, handler)
"""

import shlex
from typing import Callable, Dict, List, Optional, Sequence

from infrastructure.exceptions import CommandError, InvalidCommandError
from infrastructure.interactions.models import GenericCommand
from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import Body, InteractiveMessage
from infrastructure.notifications.ports import (
    AnalyticsReporter,
    Conversation,
    LoggingAnalyticsReporter,
    NotifierHandler,
)

logger = get_module_logger()

CommandHandler = Callable[[Sequence[str], Conversation, NotifierHandler], str]


class CommandDispatcher:
    """Routes commands to handlers keyed by command name.

    Attributes:
        platform: platform reported to analytics
        analytics: receives every dispatched command
        routes: command name -> handler
        code_block_commands: commands whose reply is shown as a code block
    """

    def __init__(self, platform: str, analytics: Optional[AnalyticsReporter] = None):
        self.platform = platform
        self.analytics = analytics or LoggingAnalyticsReporter()
        self.routes: Dict[str, CommandHandler] = {}
        self.code_block_commands: set = set()

    def register(self, name: str, handler: CommandHandler, code_block: bool = False) -> None:
        self.routes[name.lower()] = handler
        if code_block:
            self.code_block_commands.add(name.lower())
        logger.info("command_registered", command=name, platform=self.platform)

    def execute(
        self,
        command: GenericCommand,
        conversation: Conversation,
        handler: NotifierHandler,
    ) -> InteractiveMessage:
        log = logger.bind(origin=command.origin.value, channel=conversation.id)

        try:
            args = _tokenize(command.text)
        except InvalidCommandError as e:
            log.info("command_rejected", reason=str(e))
            return InteractiveMessage.text(str(e))

        if not args:
            return InteractiveMessage.text(self._usage())

        name = args[0].lower()
        self.analytics.report_command(
            self.platform, " ".join(args[:2]), command.origin, False
        )

        route = self.routes.get(name)
        if route is None:
            log.info("command_not_supported", command=name)
            return InteractiveMessage.text(self._usage())

        try:
            reply = route(args, conversation, handler)
        except CommandError as e:
            log.info("command_failed", command=name, error=str(e))
            return InteractiveMessage.text(str(e))

        log.info("command_executed", command=name)
        if name in self.code_block_commands:
            return InteractiveMessage(base_body=Body(code_block=reply))
        return InteractiveMessage.text(reply)

    def _usage(self) -> str:
        available = ", ".join(f"`{name}`" for name in sorted(self.routes))
        return f"Command not supported. Available commands: {available}."


def _tokenize(text: str) -> List[str]:
    """Split command text the way a shell would, honoring quotes."""
    try:
        return shlex.split(text)
    except ValueError as e:
        raise InvalidCommandError(f"invalid command: {e}") from e
