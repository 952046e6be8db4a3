"""Resolve interaction payloads into generic commands.

Resolution is a pure function of the payload: resolving the same payload
twice returns equal commands.

| kind                | text                             | origin              |
|---------------------|----------------------------------|---------------------|
| button              | value                            | BUTTON_CLICK        |
| multi static select | ``<action_id> <v1>,<v2>``        | MULTI_SELECT_CHANGE |
| static select       | ``<action_id> <value>``          | SELECT_CHANGE       |
| plain text input    | ``<block_id>"<trimmed value>"``  | PLAIN_TEXT_INPUT    |
| anything else       | value                            | UNKNOWN             |
"""

from typing import Optional

from infrastructure.interactions.models import (
    ButtonClick,
    CommandOrigin,
    GenericCommand,
    InteractionPayload,
    MultiStaticSelect,
    PlainTextInput,
    StaticSelect,
    UnsupportedAction,
    UploadedFile,
)

# Link buttons carry this prefix; clicking them only opens a URL.
URL_ACTION_ID_PREFIX = "url:"

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def quote(value: str) -> str:
    """Double-quote ``value`` escaping quotes, backslashes and control chars."""
    out = []
    for char in value:
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif not char.isprintable() and char != " ":
            code = ord(char)
            if code < 0x100:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def resolve(payload: InteractionPayload) -> GenericCommand:
    """Map an interaction payload to the command it triggers."""
    match payload:
        case ButtonClick(value=value):
            return GenericCommand(text=value, origin=CommandOrigin.BUTTON_CLICK)
        case MultiStaticSelect(action_id=action_id, selected_values=values):
            return GenericCommand(
                text=f"{action_id} {','.join(values)}",
                origin=CommandOrigin.MULTI_SELECT_CHANGE,
            )
        case StaticSelect(action_id=action_id, selected_value=value):
            return GenericCommand(
                text=f"{action_id} {value}", origin=CommandOrigin.SELECT_CHANGE
            )
        case PlainTextInput(block_id=block_id, value=value):
            return GenericCommand(
                text=f"{block_id}{quote(value.strip())}",
                origin=CommandOrigin.PLAIN_TEXT_INPUT,
            )
        case UnsupportedAction(value=value):
            return GenericCommand(text=value, origin=CommandOrigin.UNKNOWN)
        case _:
            raise TypeError(f"unsupported interaction payload: {type(payload).__name__}")


def is_url_action(action_id: str) -> bool:
    """True for link buttons, which never produce a command."""
    return action_id.startswith(URL_ACTION_ID_PREFIX)


def resolve_thread_target(
    thread_ts: str = "", uploaded_file: Optional[UploadedFile] = None
) -> Optional[str]:
    """Pick the thread a response should be posted into.

    The originating thread wins. Otherwise, when the response content was
    uploaded as a file, reply in the thread of its earliest public share.
    Returns None for a top-level post.
    """
    if thread_ts:
        return thread_ts

    if uploaded_file is None:
        return None

    share_timestamps = [
        share.ts
        for shares in uploaded_file.public_shares.values()
        for share in shares
        if share.ts
    ]
    if not share_timestamps:
        return None
    return min(share_timestamps, key=_ts_sort_key)


def _ts_sort_key(ts: str):
    try:
        return (0, float(ts), ts)
    except ValueError:
        return (1, 0.0, ts)
