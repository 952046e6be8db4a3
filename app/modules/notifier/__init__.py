"""Notifier module.

Chat commands that control event notifications for a channel.
"""

from modules.notifier.dispatcher import CommandDispatcher
from modules.notifier.executor import NOTIFIER_COMMAND, NotifierExecutor, NotifierVerb

__all__ = [
    "CommandDispatcher",
    "NOTIFIER_COMMAND",
    "NotifierExecutor",
    "NotifierVerb",
]
