"""Slack interaction parsing.

Turns Slack Events API and interactivity payloads into ``InboundMessage``
items. Link buttons are reported to analytics and dropped, interactions
coming from an open modal are ignored until the modal is submitted.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

import structlog

from infrastructure.interactions.models import (
    ButtonClick,
    CommandOrigin,
    InboundMessage,
    InteractionPayload,
    MultiStaticSelect,
    PlainTextInput,
    StaticSelect,
    UnsupportedAction,
)
from infrastructure.interactions.resolver import is_url_action
from infrastructure.notifications.ports import AnalyticsReporter

logger = structlog.get_logger()


class BotMention:
    """Detects and strips the leading ``<@BOT_ID>`` mention from a message."""

    def __init__(self, bot_id: str):
        self.bot_id = bot_id
        self._regex = re.compile(rf"^\s*<@{re.escape(bot_id)}>\s*")

    @property
    def bot_name(self) -> str:
        return f"<@{self.bot_id}>"

    def find_and_trim(self, text: str) -> Tuple[str, bool]:
        if not self._regex.match(text):
            return "", False
        return self._regex.sub("", text, count=1), True


def block_action_to_payload(action: Dict[str, Any]) -> InteractionPayload:
    """Convert one Slack block action (or view state value) to a payload."""
    action_id = action.get("action_id", "")
    block_id = action.get("block_id", "")
    kind = action.get("type", "")

    if kind == "button":
        return ButtonClick(action_id=action_id, value=action.get("value", ""), block_id=block_id)
    if kind == "static_select":
        selected = action.get("selected_option") or {}
        return StaticSelect(
            action_id=action_id, selected_value=selected.get("value", ""), block_id=block_id
        )
    if kind == "multi_static_select":
        values = tuple(item.get("value", "") for item in action.get("selected_options") or [])
        return MultiStaticSelect(action_id=action_id, selected_values=values, block_id=block_id)
    if kind == "plain_text_input":
        return PlainTextInput(action_id=action_id, value=action.get("value") or "", block_id=block_id)

    return UnsupportedAction(
        kind=kind, action_id=action_id, value=action.get("value") or "", block_id=block_id
    )


def parse_app_mention(event: Dict[str, Any]) -> InboundMessage:
    return InboundMessage(
        channel=event.get("channel", ""),
        user=event.get("user", ""),
        text=event.get("text", ""),
        thread_ts=event.get("thread_ts", ""),
        command_origin=CommandOrigin.TYPED,
    )


def parse_block_actions(
    body: Dict[str, Any], analytics: AnalyticsReporter, platform: str
) -> Optional[InboundMessage]:
    """Parse a ``block_actions`` interaction.

    Returns:
        InboundMessage, or None when the interaction is not actionable
    """
    actions = body.get("actions") or []
    if len(actions) != 1:
        logger.debug("ignoring_block_actions", reason="action_count", count=len(actions))
        return None

    action = actions[0]
    action_id = action.get("action_id", "")
    if is_url_action(action_id):
        analytics.report_command(platform, action_id, CommandOrigin.BUTTON_CLICK, False)
        return None

    channel_id = (body.get("channel") or {}).get("id", "")
    view_id = (body.get("view") or {}).get("id", "")
    if not channel_id and view_id:
        # Handled on modal submission instead.
        logger.debug("ignoring_block_actions", reason="active_modal", view_id=view_id)
        return None

    message = body.get("message") or {}
    # replies go to the thread of the clicked message
    thread_ts = (body.get("container") or {}).get("message_ts") or message.get("ts", "")
    if message.get("thread_ts"):
        thread_ts = message["thread_ts"]

    return InboundMessage(
        channel=channel_id,
        user=(body.get("user") or {}).get("id", ""),
        payload=block_action_to_payload(action),
        thread_ts=thread_ts,
        trigger_id=body.get("trigger_id", ""),
        response_url=body.get("response_url", ""),
        block_id=action.get("block_id", ""),
    )


def parse_view_submission(body: Dict[str, Any]) -> List[InboundMessage]:
    """Parse a modal submission; every input value becomes one message.

    The channel to answer in travels in the view's private metadata.
    """
    view = body.get("view") or {}
    channel = view.get("private_metadata", "")
    user = (body.get("user") or {}).get("id", "")
    values = (view.get("state") or {}).get("values") or {}

    out = []
    for block_values in values.values():
        for action_id, action in block_values.items():
            normalized = dict(action, action_id=action_id)
            out.append(
                InboundMessage(
                    channel=channel,
                    user=user,
                    payload=block_action_to_payload(normalized),
                )
            )
    return out
