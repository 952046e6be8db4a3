"""Slack client facade.

Wraps the Slack SDK (slack_sdk.WebClient) as a MessageDeliveryAdapter with
OperationResult-based APIs for consistent error handling.
"""

from typing import Any, Callable, Dict, List, Optional

import structlog
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from slack_sdk.webhook import WebhookClient

from infrastructure.interactions.models import FileShare, UploadedFile
from infrastructure.interactions.resolver import URL_ACTION_ID_PREFIX
from infrastructure.notifications.adapters import MessageDeliveryAdapter
from infrastructure.notifications.models import Button, InteractiveMessage, Section, Select
from infrastructure.operations import OperationResult, OperationStatus

logger = structlog.get_logger()

SOCKET_SLACK_PLATFORM = "socketSlack"
_TRANSIENT_STATUS_CODES = (429, 500, 502, 503, 504)
_MODAL_TITLE_LIMIT = 24
_ACTIONS_ELEMENT_LIMIT = 25
_NOT_FOUND_ERRORS = ("channel_not_found", "user_not_found", "message_not_found")
_UNAUTHORIZED_ERRORS = ("invalid_auth", "not_authed", "token_revoked", "missing_scope")


class SlackClientFacade(MessageDeliveryAdapter):
    """Slack delivery adapter with standardized OperationResult returns.

    Args:
        token: Slack bot token for API authentication
        client: optional pre-built WebClient (tests, custom transports)

    Example:
        >>> client = SlackClientFacade(token="xoxb-...")
        >>> result = client.post_message("C123", InteractiveMessage.text("Hello"))
        >>> if result.is_success:
        ...     print(result.data["ts"])
    """

    def __init__(self, token: str, client: Optional[WebClient] = None):
        self._client = client or WebClient(token=token)
        self._log = logger.bind(component="slack_client_facade")

    @property
    def platform(self) -> str:
        return SOCKET_SLACK_PLATFORM

    def _call(
        self,
        log,
        operation: str,
        func: Callable[..., Any],
        on_success: Callable[[Any], OperationResult],
        **kwargs,
    ) -> OperationResult:
        try:
            response = func(**kwargs)

            if not response.get("ok"):
                error = response.get("error", "unknown_error")
                log.warning(f"slack_{operation}_failed", error=error)
                return _error_result(error)

            return on_success(response)

        except SlackApiError as e:
            log.exception("slack_api_error", operation=operation, error=str(e))
            error = e.response.get("error", "unknown_error")

            if e.response.status_code in _TRANSIENT_STATUS_CODES:
                retry_after = int(e.response.headers.get("Retry-After", 60))
                return OperationResult.transient_error(
                    message=f"Slack API transient error: {error}",
                    error_code=f"SLACK_{error.upper()}",
                    retry_after=retry_after,
                )

            return _error_result(error)

        except Exception as e:
            log.exception("slack_client_error", operation=operation, error=str(e))
            return OperationResult.permanent_error(
                message=f"Unexpected error during {operation}: {str(e)}",
                error_code="SLACK_CLIENT_ERROR",
            )

    def post_message(
        self,
        channel: str,
        message: InteractiveMessage,
        thread_ts: Optional[str] = None,
        replace_original_url: Optional[str] = None,
    ) -> OperationResult:
        """Post a message to a Slack channel.

        When ``replace_original_url`` is set the message replaces the one the
        interaction came from, through the interaction response URL.
        """
        log = self._log.bind(channel=channel, thread_ts=thread_ts)

        if replace_original_url:
            return self._replace_original(log, replace_original_url, message)

        def _posted(response) -> OperationResult:
            log.info("slack_message_posted", ts=response.get("ts"))
            return OperationResult.success(
                data={"ts": response.get("ts"), "channel": response.get("channel")},
                message="Message posted successfully",
            )

        return self._call(
            log,
            "post_message",
            self._client.chat_postMessage,
            _posted,
            channel=channel,
            text=message.render(),
            blocks=_message_blocks(message),
            thread_ts=thread_ts,
        )

    def _replace_original(
        self, log, response_url: str, message: InteractiveMessage
    ) -> OperationResult:
        try:
            response = WebhookClient(response_url).send(
                text=message.render(),
                blocks=_message_blocks(message),
                replace_original=True,
            )
        except Exception as e:
            log.exception("slack_replace_original_error", error=str(e))
            return OperationResult.permanent_error(
                message=f"Unexpected error replacing message: {str(e)}",
                error_code="SLACK_CLIENT_ERROR",
            )

        if response.status_code != 200:
            log.warning("slack_replace_original_failed", status=response.status_code)
            return OperationResult.permanent_error(
                message=f"Slack response URL error: {response.body}",
                error_code="SLACK_RESPONSE_URL_ERROR",
            )

        log.info("slack_message_replaced")
        return OperationResult.success(data={"ts": None}, message="Message replaced")

    def post_ephemeral(
        self,
        channel: str,
        user: str,
        message: InteractiveMessage,
        thread_ts: Optional[str] = None,
    ) -> OperationResult:
        """Post a message visible only to ``user``."""
        log = self._log.bind(channel=channel, user=user)

        def _posted(response) -> OperationResult:
            log.info("slack_ephemeral_posted", ts=response.get("message_ts"))
            return OperationResult.success(
                data={"ts": response.get("message_ts")},
                message="Ephemeral message posted successfully",
            )

        return self._call(
            log,
            "post_ephemeral",
            self._client.chat_postEphemeral,
            _posted,
            channel=channel,
            user=user,
            text=message.render(),
            blocks=_message_blocks(message),
            thread_ts=thread_ts,
        )

    def open_modal(
        self, trigger_id: str, message: InteractiveMessage, private_metadata: str = ""
    ) -> OperationResult:
        """Open a modal view built from ``message``."""
        log = self._log.bind(trigger_id=trigger_id[:10])

        def _opened(response) -> OperationResult:
            view_data: Dict[str, Any] = response.get("view", {})
            view_id = view_data.get("id") if isinstance(view_data, dict) else None
            log.info("slack_view_opened", view_id=view_id)
            return OperationResult.success(
                data={"view_id": view_id}, message="View opened successfully"
            )

        return self._call(
            log,
            "open_view",
            self._client.views_open,
            _opened,
            trigger_id=trigger_id,
            view=_modal_view(message, private_metadata),
        )

    def upload_file(
        self,
        channel: str,
        content: str,
        thread_ts: Optional[str] = None,
        filename: str = "response.txt",
    ) -> OperationResult:
        """Upload ``content`` as a text file into ``channel``."""
        log = self._log.bind(channel=channel, size=len(content))

        def _uploaded(response) -> OperationResult:
            file_data = response.get("file") or {}
            uploaded = _uploaded_file(file_data)
            log.info("slack_file_uploaded", file_id=uploaded.id)
            return OperationResult.success(data=uploaded, message="File uploaded")

        return self._call(
            log,
            "upload_file",
            self._client.files_upload_v2,
            _uploaded,
            channel=channel,
            content=content,
            filename=filename,
            initial_comment="Response is too long, sending as a file.",
            thread_ts=thread_ts,
        )

    def get_conversation_name(self, channel_id: str) -> OperationResult:
        """Resolve a channel id to its name (bindings are declared by name)."""
        log = self._log.bind(channel_id=channel_id)

        def _found(response) -> OperationResult:
            name = (response.get("channel") or {}).get("name", "")
            return OperationResult.success(data={"name": name})

        return self._call(
            log,
            "conversations_info",
            self._client.conversations_info,
            _found,
            channel=channel_id,
            include_num_members=False,
        )

    def get_bot_user_id(self) -> OperationResult:
        """Return the bot user id from ``auth.test``."""

        def _found(response) -> OperationResult:
            return OperationResult.success(data={"user_id": response.get("user_id")})

        return self._call(self._log, "auth_test", self._client.auth_test, _found)

    @property
    def raw_client(self) -> WebClient:
        """Access the underlying Slack WebClient.

        Warning:
            Direct client access bypasses OperationResult wrapping.
        """
        return self._client


def _message_blocks(message: InteractiveMessage) -> Optional[List[Dict[str, Any]]]:
    """Block Kit layout for messages with interactive elements.

    Plain messages are sent as ``text`` only and get no blocks.
    """
    actions = [block for block in map(_actions_block, message.sections) if block]
    inputs = _input_blocks(message)
    if not actions and not inputs:
        return None

    blocks: List[Dict[str, Any]] = []
    text = message.render(include_controls=False)
    if text:
        blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": text}})
    blocks.extend(actions)
    blocks.extend(inputs)
    return blocks


def _actions_block(section: Section) -> Optional[Dict[str, Any]]:
    elements = [_button_element(idx, button) for idx, button in enumerate(section.buttons)]
    elements.extend(_select_element(select) for select in section.selects if select.items)
    if not elements:
        return None
    return {"type": "actions", "elements": elements[:_ACTIONS_ELEMENT_LIMIT]}


def _button_element(idx: int, button: Button) -> Dict[str, Any]:
    element: Dict[str, Any] = {
        "type": "button",
        "text": {"type": "plain_text", "text": button.name},
    }
    if button.url:
        # link buttons open in the browser; the click is only reported
        element["action_id"] = f"{URL_ACTION_ID_PREFIX}{idx}"
        element["url"] = button.url
    else:
        element["action_id"] = f"button-{idx}"
        element["value"] = button.command
    if button.style:
        element["style"] = button.style
    return element


def _select_element(select: Select) -> Dict[str, Any]:
    return {
        "type": "static_select",
        "action_id": select.command,
        "placeholder": {"type": "plain_text", "text": select.name},
        "options": [
            {"text": {"type": "plain_text", "text": item.name}, "value": item.value}
            for item in select.items
        ],
    }


def _input_blocks(message: InteractiveMessage) -> List[Dict[str, Any]]:
    blocks = []
    for item in message.plaintext_inputs:
        blocks.append(
            {
                "type": "input",
                "block_id": item.command,
                "dispatch_action": item.dispatch_action,
                "label": {"type": "plain_text", "text": item.text},
                "element": {
                    "type": "plain_text_input",
                    "action_id": "plain_text_input",
                    "placeholder": {"type": "plain_text", "text": item.placeholder or " "},
                },
            }
        )
    return blocks


def _modal_view(message: InteractiveMessage, private_metadata: str) -> Dict[str, Any]:
    title = (message.header or "Bot")[:_MODAL_TITLE_LIMIT]
    blocks = _message_blocks(message)
    if blocks is None:
        text = message.render()
        blocks = [{"type": "section", "text": {"type": "mrkdwn", "text": text}}] if text else []
    return {
        "type": "modal",
        "title": {"type": "plain_text", "text": title},
        "submit": {"type": "plain_text", "text": "Submit"},
        "close": {"type": "plain_text", "text": "Cancel"},
        "private_metadata": private_metadata,
        "blocks": blocks,
    }


def _uploaded_file(file_data: Dict[str, Any]) -> UploadedFile:
    public = (file_data.get("shares") or {}).get("public") or {}
    shares = {
        channel: tuple(FileShare(ts=share.get("ts", "")) for share in channel_shares)
        for channel, channel_shares in public.items()
    }
    return UploadedFile(id=file_data.get("id", ""), public_shares=shares)


def _error_result(error: str) -> OperationResult:
    if error in _NOT_FOUND_ERRORS:
        status = OperationStatus.NOT_FOUND
    elif error in _UNAUTHORIZED_ERRORS:
        status = OperationStatus.UNAUTHORIZED
    else:
        status = OperationStatus.PERMANENT_ERROR
    return OperationResult.error(
        status, message=f"Slack API error: {error}", error_code=f"SLACK_{error.upper()}"
    )
