"""Unit tests for the Slack client facade."""

from unittest.mock import MagicMock, Mock, patch

import pytest
from slack_sdk.errors import SlackApiError

from infrastructure.interactions.models import FileShare, UploadedFile
from infrastructure.interactions.resolver import is_url_action
from infrastructure.notifications.models import (
    Button,
    InteractiveMessage,
    LabelInput,
    OptionItem,
    Section,
    Select,
)
from infrastructure.operations import OperationStatus
from infrastructure.platforms.clients.slack import SOCKET_SLACK_PLATFORM, SlackClientFacade


def _response(data: dict, status_code: int = 200, headers: dict = None):
    return Mock(
        get=lambda k, d=None: data.get(k, d),
        data=data,
        status_code=status_code,
        headers=headers or {},
    )


@pytest.fixture
def web_client():
    return MagicMock()


@pytest.fixture
def facade(web_client):
    return SlackClientFacade(token="xoxb-test", client=web_client)


@pytest.mark.unit
class TestConstruction:
    @patch("infrastructure.platforms.clients.slack.WebClient")
    def test_builds_web_client_from_token(self, mock_web_client):
        facade = SlackClientFacade(token="xoxb-test")

        mock_web_client.assert_called_once_with(token="xoxb-test")
        assert facade.raw_client is mock_web_client.return_value
        assert facade.platform == SOCKET_SLACK_PLATFORM


@pytest.mark.unit
class TestPostMessage:
    def test_success(self, facade, web_client):
        web_client.chat_postMessage.return_value = _response(
            {"ok": True, "ts": "1.0", "channel": "C1"}
        )

        result = facade.post_message("C1", InteractiveMessage.text("hi"), thread_ts="0.5")

        assert result.is_success
        assert result.data == {"ts": "1.0", "channel": "C1"}
        kwargs = web_client.chat_postMessage.call_args.kwargs
        assert kwargs["channel"] == "C1"
        assert kwargs["text"] == "hi"
        assert kwargs["thread_ts"] == "0.5"
        assert kwargs["blocks"] is None

    def test_text_inputs_become_input_blocks(self, facade, web_client):
        web_client.chat_postMessage.return_value = _response({"ok": True, "ts": "1.0"})
        message = InteractiveMessage(
            plaintext_inputs=[LabelInput(command="@bot logs ", text="Filter logs")]
        )

        facade.post_message("C1", message)

        blocks = web_client.chat_postMessage.call_args.kwargs["blocks"]
        assert blocks[0]["type"] == "input"
        assert blocks[0]["block_id"] == "@bot logs "
        assert blocks[0]["dispatch_action"] is True
        assert blocks[0]["label"]["text"] == "Filter logs"

    def test_buttons_and_selects_become_actions(self, facade, web_client):
        web_client.chat_postMessage.return_value = _response({"ok": True, "ts": "1.0"})
        message = InteractiveMessage(
            header="ERROR: pod crashed",
            sections=[
                Section(
                    header="Run command",
                    buttons=[
                        Button(name="Describe", command="@bot kubectl describe pod web"),
                        Button(name="Docs", url="https://example.com/runbook"),
                    ],
                    selects=[
                        Select(
                            name="Namespace",
                            command="@bot kubectl get pods -n",
                            items=[OptionItem(name="default", value="default")],
                        )
                    ],
                )
            ],
        )

        facade.post_message("C1", message)

        kwargs = web_client.chat_postMessage.call_args.kwargs
        section, actions = kwargs["blocks"]
        assert section["type"] == "section"
        assert "Run command" in section["text"]["text"]
        assert "describe pod" not in section["text"]["text"]
        assert actions["type"] == "actions"
        button, link, select = actions["elements"]
        assert button["type"] == "button"
        assert button["value"] == "@bot kubectl describe pod web"
        assert not is_url_action(button["action_id"])
        assert link["url"] == "https://example.com/runbook"
        assert is_url_action(link["action_id"])
        assert "value" not in link
        assert select["type"] == "static_select"
        assert select["action_id"] == "@bot kubectl get pods -n"
        assert select["options"] == [
            {"text": {"type": "plain_text", "text": "default"}, "value": "default"}
        ]
        assert "describe pod" in kwargs["text"]

    def test_not_ok_response(self, facade, web_client):
        web_client.chat_postMessage.return_value = _response(
            {"ok": False, "error": "is_archived"}
        )

        result = facade.post_message("C1", InteractiveMessage.text("hi"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "SLACK_IS_ARCHIVED"

    def test_channel_not_found_maps_to_not_found(self, facade, web_client):
        web_client.chat_postMessage.side_effect = SlackApiError(
            "error", _response({"ok": False, "error": "channel_not_found"}, status_code=404)
        )

        result = facade.post_message("C1", InteractiveMessage.text("hi"))

        assert result.status == OperationStatus.NOT_FOUND
        assert result.error_code == "SLACK_CHANNEL_NOT_FOUND"

    def test_invalid_auth_maps_to_unauthorized(self, facade, web_client):
        web_client.chat_postMessage.return_value = _response(
            {"ok": False, "error": "invalid_auth"}
        )

        result = facade.post_message("C1", InteractiveMessage.text("hi"))

        assert result.status == OperationStatus.UNAUTHORIZED

    def test_rate_limit_is_transient(self, facade, web_client):
        web_client.chat_postMessage.side_effect = SlackApiError(
            "rate limited",
            _response({"ok": False, "error": "ratelimited"}, 429, {"Retry-After": "30"}),
        )

        result = facade.post_message("C1", InteractiveMessage.text("hi"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.retry_after == 30

    def test_unexpected_exception(self, facade, web_client):
        web_client.chat_postMessage.side_effect = ConnectionError("reset")

        result = facade.post_message("C1", InteractiveMessage.text("hi"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "SLACK_CLIENT_ERROR"

    @patch("infrastructure.platforms.clients.slack.WebhookClient")
    def test_replace_original(self, mock_webhook, facade, web_client):
        mock_webhook.return_value.send.return_value = Mock(status_code=200, body="ok")

        result = facade.post_message(
            "C1",
            InteractiveMessage.text("updated"),
            replace_original_url="https://hooks.slack.com/actions/1",
        )

        assert result.is_success
        mock_webhook.assert_called_once_with("https://hooks.slack.com/actions/1")
        assert mock_webhook.return_value.send.call_args.kwargs["replace_original"] is True
        web_client.chat_postMessage.assert_not_called()

    @patch("infrastructure.platforms.clients.slack.WebhookClient")
    def test_replace_original_failure(self, mock_webhook, facade):
        mock_webhook.return_value.send.return_value = Mock(status_code=404, body="expired_url")

        result = facade.post_message(
            "C1", InteractiveMessage.text("updated"), replace_original_url="https://x"
        )

        assert result.error_code == "SLACK_RESPONSE_URL_ERROR"


@pytest.mark.unit
class TestOtherCalls:
    def test_post_ephemeral(self, facade, web_client):
        web_client.chat_postEphemeral.return_value = _response({"ok": True, "message_ts": "3.0"})

        result = facade.post_ephemeral("C1", "U1", InteractiveMessage.text("psst"))

        assert result.data == {"ts": "3.0"}
        kwargs = web_client.chat_postEphemeral.call_args.kwargs
        assert kwargs["user"] == "U1"
        assert kwargs["channel"] == "C1"

    def test_open_modal_carries_channel(self, facade, web_client):
        web_client.views_open.return_value = _response({"ok": True, "view": {"id": "V1"}})

        result = facade.open_modal(
            "trigger-123", InteractiveMessage.text("pick", header="Choose"), private_metadata="C1"
        )

        assert result.data == {"view_id": "V1"}
        view = web_client.views_open.call_args.kwargs["view"]
        assert view["type"] == "modal"
        assert view["private_metadata"] == "C1"
        assert view["title"]["text"] == "Choose"

    def test_upload_file_returns_shares(self, facade, web_client):
        web_client.files_upload_v2.return_value = _response(
            {
                "ok": True,
                "file": {
                    "id": "F1",
                    "shares": {"public": {"C1": [{"ts": "2.0"}, {"ts": "1.0"}]}},
                },
            }
        )

        result = facade.upload_file("C1", "long content", thread_ts="0.1")

        assert result.data == UploadedFile(
            id="F1", public_shares={"C1": (FileShare(ts="2.0"), FileShare(ts="1.0"))}
        )
        kwargs = web_client.files_upload_v2.call_args.kwargs
        assert kwargs["content"] == "long content"
        assert kwargs["thread_ts"] == "0.1"

    def test_get_conversation_name(self, facade, web_client):
        web_client.conversations_info.return_value = _response(
            {"ok": True, "channel": {"id": "C1", "name": "alerts"}}
        )

        assert facade.get_conversation_name("C1").data == {"name": "alerts"}

    def test_get_bot_user_id(self, facade, web_client):
        web_client.auth_test.return_value = _response({"ok": True, "user_id": "UBOT"})

        assert facade.get_bot_user_id().data == {"user_id": "UBOT"}
