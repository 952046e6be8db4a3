"""Platform-neutral interaction models.

Platform adapters turn their native interaction callbacks into one of the
``InteractionPayload`` variants. The resolver maps each variant to a
``GenericCommand`` that command execution consumes the same way whatever
the platform.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Tuple, Union


class CommandOrigin(str, Enum):
    """How a command was produced."""

    TYPED = "typed"
    BUTTON_CLICK = "btn-click"
    MULTI_SELECT_CHANGE = "multi-select-change"
    SELECT_CHANGE = "select-change"
    PLAIN_TEXT_INPUT = "plain-text-input"
    AUTOMATION = "automation"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GenericCommand:
    """Command text plus its origin, handed to the executor."""

    text: str
    origin: CommandOrigin


@dataclass(frozen=True)
class ButtonClick:
    action_id: str
    value: str
    block_id: str = ""


@dataclass(frozen=True)
class StaticSelect:
    action_id: str
    selected_value: str
    block_id: str = ""


@dataclass(frozen=True)
class MultiStaticSelect:
    action_id: str
    selected_values: Tuple[str, ...] = ()
    block_id: str = ""


@dataclass(frozen=True)
class PlainTextInput:
    action_id: str
    value: str
    block_id: str = ""


@dataclass(frozen=True)
class UnsupportedAction:
    """Any element kind the resolver has no rule for (datepicker, overflow...)."""

    kind: str
    action_id: str
    value: str = ""
    block_id: str = ""


InteractionPayload = Union[
    ButtonClick,
    StaticSelect,
    MultiStaticSelect,
    PlainTextInput,
    UnsupportedAction,
]


@dataclass(frozen=True)
class FileShare:
    """One public share of an uploaded file."""

    ts: str


@dataclass(frozen=True)
class UploadedFile:
    """Reference to a file the bot uploaded instead of posting a long message.

    Attributes:
        id: platform file id
        public_shares: shares keyed by channel id, oldest first
    """

    id: str
    public_shares: Mapping[str, Sequence[FileShare]] = field(default_factory=dict)


@dataclass(frozen=True)
class InboundMessage:
    """Normalized inbound chat item queued for processing.

    Exactly one of ``text`` (typed message) or ``payload`` (interaction) is
    the command source. ``command_origin`` is set for typed messages and
    resolved from the payload otherwise.
    """

    channel: str
    user: str = ""
    text: str = ""
    payload: Optional[InteractionPayload] = None
    thread_ts: str = ""
    trigger_id: str = ""
    response_url: str = ""
    block_id: str = ""
    command_origin: CommandOrigin = CommandOrigin.TYPED
