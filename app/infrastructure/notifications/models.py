"""Notification and delivery models.

Executors return an ``InteractiveMessage``; the delivery layer fans it out
to ``DeliveryTarget``s and reports the outcome in a ``DeliveryReport``.

Uses Pydantic BaseModel for message content (validated, serializable) and
dataclasses for delivery bookkeeping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from infrastructure.exceptions import DeliveryError
from infrastructure.interactions.models import CommandOrigin


class MessageType(str, Enum):
    """DEFAULT posts into the channel, POPUP opens a modal when possible."""

    DEFAULT = "default"
    POPUP = "popup"


class Body(BaseModel):
    code_block: str = ""
    plaintext: str = ""


class Button(BaseModel):
    name: str
    command: str = ""
    url: str = ""
    style: str = ""


class OptionItem(BaseModel):
    name: str
    value: str


class Select(BaseModel):
    name: str
    command: str
    items: List[OptionItem] = Field(default_factory=list)


class TextField(BaseModel):
    key: str
    value: str


class LabelInput(BaseModel):
    """Plain text input. The typed value is appended to ``command``."""

    command: str
    text: str
    placeholder: str = ""
    dispatch_action: bool = True


class Section(BaseModel):
    header: str = ""
    base_body: Body = Field(default_factory=Body)
    text_fields: List[TextField] = Field(default_factory=list)
    buttons: List[Button] = Field(default_factory=list)
    selects: List[Select] = Field(default_factory=list)
    context: List[str] = Field(default_factory=list)


class InteractiveMessage(BaseModel):
    """Platform-agnostic message returned by executors.

    Attributes:
        type: DEFAULT or POPUP
        header: optional title line
        base_body: main text and code block
        sections: interactive sections (buttons, selects, fields)
        plaintext_inputs: text inputs, kept even when content moves to a file
        only_visible_for_you: deliver ephemerally to the requesting user
        replace_original: replace the message the interaction came from
    """

    type: MessageType = MessageType.DEFAULT
    header: str = ""
    base_body: Body = Field(default_factory=Body)
    sections: List[Section] = Field(default_factory=list)
    plaintext_inputs: List[LabelInput] = Field(default_factory=list)
    only_visible_for_you: bool = False
    replace_original: bool = False

    @classmethod
    def text(cls, text: str, **kwargs) -> "InteractiveMessage":
        return cls(base_body=Body(plaintext=text), **kwargs)

    def render(self, include_controls: bool = True) -> str:
        """Render a platform-neutral markdown version of the message.

        Buttons and selects are listed as text unless ``include_controls`` is
        False, for platforms that send them as interactive elements.
        """
        lines: List[str] = []
        if self.header:
            lines.append(f"*{self.header}*")
        lines.extend(_render_body(self.base_body))

        for section in self.sections:
            if section.header:
                lines.append(f"*{section.header}*")
            lines.extend(_render_body(section.base_body))
            for text_field in section.text_fields:
                lines.append(f"*{text_field.key}:* {text_field.value}")
            for button in section.buttons if include_controls else ():
                lines.append(f"• {button.name}: `{button.command or button.url}`")
            for select in section.selects if include_controls else ():
                options = ", ".join(item.name for item in select.items)
                lines.append(f"• {select.name}: {options}")
            lines.extend(section.context)

        return "\n".join(line for line in lines if line)

    def fallback(self) -> "InteractiveMessage":
        """Message sent after the content was uploaded as a file.

        Only text inputs survive; other controls refer to content that is
        no longer in the message.
        """
        return InteractiveMessage(
            plaintext_inputs=[item.model_copy() for item in self.plaintext_inputs]
        )


def _render_body(body: Body) -> List[str]:
    lines = []
    if body.plaintext:
        lines.append(body.plaintext)
    if body.code_block:
        lines.append(f"```\n{body.code_block}\n```")
    return lines


@dataclass(frozen=True)
class DeliveryTarget:
    """Where and how one copy of a message is delivered.

    Attributes:
        channel: platform channel id or name
        user: requesting user, needed for ephemeral delivery
        thread_ts: thread of the originating interaction
        trigger_id: lets the platform open a modal
        response_url: handle used to replace the original message
        block_id: id of the block the interaction came from
        command_origin: how the command behind this message was produced
    """

    channel: str
    user: str = ""
    thread_ts: str = ""
    trigger_id: str = ""
    response_url: str = ""
    block_id: str = ""
    command_origin: CommandOrigin = CommandOrigin.AUTOMATION


@dataclass(frozen=True)
class DeliveryFailure:
    channel: str
    reason: str
    error_code: Optional[str] = None

    def __str__(self) -> str:
        return f"while sending message to channel {self.channel!r}: {self.reason}"


@dataclass
class DeliveryReport:
    """Outcome of one delivery batch.

    Attributes:
        delivered: channel -> delivery id (message ts, or None for modals);
            each channel is delivered to at most once per batch
        failures: failed targets with reasons
        cancelled: targets not completed because the batch was cancelled
    """

    delivered: dict = field(default_factory=dict)
    failures: List[DeliveryFailure] = field(default_factory=list)
    cancelled: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise DeliveryError(self.failures)
