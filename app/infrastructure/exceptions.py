"""Exceptions raised by the routing, toggle and delivery core.

Example:
    try:
        registry.set_notify("alerts", False)
    except ChannelNotFoundError as e:
        respond(str(e))
"""

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from infrastructure.bindings.models import BindingError
    from infrastructure.notifications.models import DeliveryFailure


class ChatOpsError(Exception):
    """Base exception for all bot errors."""

    pass


class ConfigValidationError(ChatOpsError):
    """Raised at startup when the bindings configuration has critical errors.

    Attributes:
        errors: every critical error collected during validation
    """

    def __init__(self, errors: Sequence["BindingError"]):
        self.errors = list(errors)
        lines = "\n".join(f"\t* {err.message}" for err in self.errors)
        super().__init__(f"{len(self.errors)} critical configuration error(s):\n{lines}")


class ChannelNotFoundError(ChatOpsError):
    """Raised when toggling notifications for a channel the bot is not bound to."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"notifications are not configured for channel {channel!r}")


class DeliveryError(ChatOpsError):
    """Aggregate of per-channel delivery failures from one delivery batch.

    Attributes:
        failures: one entry per failed target, in target order
    """

    def __init__(self, failures: Sequence["DeliveryFailure"]):
        self.failures: List["DeliveryFailure"] = list(failures)
        if len(self.failures) == 1:
            super().__init__(f"1 error occurred:\n\t* {self.failures[0]}")
            return
        lines = "\n".join(f"\t* {failure}" for failure in self.failures)
        super().__init__(f"{len(self.failures)} errors occurred:\n{lines}")

    @property
    def channels(self) -> List[str]:
        return [failure.channel for failure in self.failures]


class CommandError(ChatOpsError):
    """Base for errors returned to the user as a chat reply."""

    pass


class InvalidCommandError(CommandError):
    """Command has the wrong number of arguments."""

    def __init__(self, message: str = "invalid command"):
        super().__init__(message)


class UnsupportedCommandError(CommandError):
    """Command verb is not known to the executor."""

    def __init__(self, message: str = "unsupported command"):
        super().__init__(message)
