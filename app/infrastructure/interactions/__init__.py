"""Interactive action models and resolution."""

from infrastructure.interactions.models import (
    ButtonClick,
    CommandOrigin,
    FileShare,
    GenericCommand,
    InboundMessage,
    InteractionPayload,
    MultiStaticSelect,
    PlainTextInput,
    StaticSelect,
    UnsupportedAction,
    UploadedFile,
)
from infrastructure.interactions.resolver import (
    URL_ACTION_ID_PREFIX,
    is_url_action,
    resolve,
    resolve_thread_target,
)

__all__ = [
    "ButtonClick",
    "CommandOrigin",
    "FileShare",
    "GenericCommand",
    "InboundMessage",
    "InteractionPayload",
    "MultiStaticSelect",
    "PlainTextInput",
    "StaticSelect",
    "UnsupportedAction",
    "UploadedFile",
    "URL_ACTION_ID_PREFIX",
    "is_url_action",
    "resolve",
    "resolve_thread_target",
]
