"""Unit tests for interaction payload resolution."""

import pytest

from infrastructure.interactions.models import (
    ButtonClick,
    CommandOrigin,
    FileShare,
    MultiStaticSelect,
    PlainTextInput,
    StaticSelect,
    UnsupportedAction,
    UploadedFile,
)
from infrastructure.interactions.resolver import (
    is_url_action,
    quote,
    resolve,
    resolve_thread_target,
)


@pytest.mark.unit
class TestResolve:
    def test_button_click_uses_value(self):
        command = resolve(ButtonClick(action_id="a1", value="@bot kubectl get pods"))

        assert command.text == "@bot kubectl get pods"
        assert command.origin == CommandOrigin.BUTTON_CLICK

    def test_static_select(self):
        command = resolve(StaticSelect(action_id="@bot kubectl get", selected_value="pods"))

        assert command.text == "@bot kubectl get pods"
        assert command.origin == CommandOrigin.SELECT_CHANGE

    def test_multi_static_select_joins_values(self):
        command = resolve(
            MultiStaticSelect(action_id="ns", selected_values=("default", "kube-system"))
        )

        assert command.text == "ns default,kube-system"
        assert command.origin == CommandOrigin.MULTI_SELECT_CHANGE

    def test_plain_text_input_is_trimmed_and_quoted(self):
        command = resolve(
            PlainTextInput(action_id="x", value="  logs -f  ", block_id="@bot kubectl ")
        )

        assert command.text == '@bot kubectl "logs -f"'
        assert command.origin == CommandOrigin.PLAIN_TEXT_INPUT

    def test_plain_text_input_escapes_quotes(self):
        command = resolve(PlainTextInput(action_id="x", value='say "hi"', block_id="cmd "))

        assert command.text == 'cmd "say \\"hi\\""'

    def test_unknown_kind_falls_back_to_value(self):
        command = resolve(UnsupportedAction(kind="datepicker", action_id="d", value="2024-01-01"))

        assert command.text == "2024-01-01"
        assert command.origin == CommandOrigin.UNKNOWN

    def test_resolution_is_idempotent(self):
        payload = MultiStaticSelect(action_id="ns", selected_values=("a", "b"))

        assert resolve(payload) == resolve(payload)

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            resolve("not a payload")


@pytest.mark.unit
class TestQuote:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("plain", '"plain"'),
            ("", '""'),
            ("a\tb\nc", '"a\\tb\\nc"'),
            ("back\\slash", '"back\\\\slash"'),
            ("\x00", '"\\x00"'),
            ("héllo", '"héllo"'),
        ],
    )
    def test_quote(self, value, expected):
        assert quote(value) == expected


@pytest.mark.unit
class TestUrlActions:
    def test_url_prefix(self):
        assert is_url_action("url:https://example.com")
        assert not is_url_action("@bot kubectl get")


@pytest.mark.unit
class TestResolveThreadTarget:
    def test_originating_thread_wins(self):
        uploaded = UploadedFile(id="F1", public_shares={"C1": (FileShare(ts="1.0"),)})

        assert resolve_thread_target("5.5", uploaded) == "5.5"

    def test_no_thread_no_file(self):
        assert resolve_thread_target("", None) is None

    def test_earliest_share_across_channels(self):
        uploaded = UploadedFile(
            id="F1",
            public_shares={
                "C1": (FileShare(ts="1700000005.000000"),),
                "C2": (FileShare(ts="1700000003.000000"), FileShare(ts="1700000009.000000")),
            },
        )

        assert resolve_thread_target("", uploaded) == "1700000003.000000"

    def test_file_without_public_shares(self):
        assert resolve_thread_target("", UploadedFile(id="F1")) is None
