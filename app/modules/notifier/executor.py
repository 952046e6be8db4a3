"""Notifier executor.

Handles ``notifier <verb>`` commands that toggle or show event
notifications for the conversation they are typed in.
"""

from enum import Enum
from typing import Sequence

import yaml

from infrastructure.bindings.models import BotConfig
from infrastructure.exceptions import (
    ChannelNotFoundError,
    InvalidCommandError,
    UnsupportedCommandError,
)
from infrastructure.logging import get_module_logger
from infrastructure.notifications.ports import Conversation, NotifierHandler

logger = get_module_logger()

NOTIFIER_COMMAND = "notifier"

_START_MSG = "Brace yourselves, incoming notifications from cluster '{cluster}'."
_STOP_MSG = "Sure! I won't send you notifications from cluster '{cluster}' here."
_STATUS_MSG = "Notifications from cluster '{cluster}' are {status} here."
_NOT_CONFIGURED_MSG = (
    "I'm not configured to send notifications here ('{channel}') from cluster "
    "'{cluster}', so you cannot turn them on or off."
)
_SHOW_CONFIG_MSG = 'Showing config for cluster "{cluster}":\n\n{config}'


class NotifierVerb(str, Enum):
    START = "start"
    STOP = "stop"
    STATUS = "status"
    SHOW_CONFIG = "showconfig"


class NotifierExecutor:
    """Executes notifier verbs against a NotifierHandler.

    Args:
        cluster_name: cluster named in every reply
        config: loaded bindings config, dumped by ``showconfig``
    """

    def __init__(self, cluster_name: str, config: BotConfig):
        self.cluster_name = cluster_name
        self.config = config

    def execute(
        self,
        args: Sequence[str],
        conversation: Conversation,
        handler: NotifierHandler,
    ) -> str:
        """Run ``args`` (``["notifier", "<verb>"]``) and return the reply.

        Raises:
            InvalidCommandError: if no verb or extra arguments are given
            UnsupportedCommandError: if the verb is unknown
        """
        if len(args) != 2:
            raise InvalidCommandError()

        try:
            verb = NotifierVerb(args[1].lower())
        except ValueError:
            raise UnsupportedCommandError() from None

        log = logger.bind(verb=verb.value, channel=conversation.id)

        match verb:
            case NotifierVerb.START:
                return self._toggle(conversation, handler, True, _START_MSG, log)
            case NotifierVerb.STOP:
                return self._toggle(conversation, handler, False, _STOP_MSG, log)
            case NotifierVerb.STATUS:
                enabled = handler.notifications_enabled(conversation.id)
                return _STATUS_MSG.format(
                    cluster=self.cluster_name,
                    status="enabled" if enabled else "disabled",
                )
            case NotifierVerb.SHOW_CONFIG:
                dumped = yaml.safe_dump(self.config.redacted_dump(), sort_keys=False)
                return _SHOW_CONFIG_MSG.format(cluster=self.cluster_name, config=dumped)

    def _toggle(self, conversation, handler, enabled: bool, reply: str, log) -> str:
        try:
            handler.set_notifications_enabled(conversation.id, enabled)
        except ChannelNotFoundError:
            log.info("notifier_channel_not_configured")
            return _NOT_CONFIGURED_MSG.format(
                channel=conversation.id, cluster=self.cluster_name
            )

        log.info("notifier_toggled", enabled=enabled)
        return reply.format(cluster=self.cluster_name)
