"""Unit tests for the notifier executor."""

import pytest

from infrastructure.exceptions import InvalidCommandError, UnsupportedCommandError
from modules.notifier.executor import NotifierExecutor

STATUS = ["notifier", "status"]


@pytest.fixture
def executor(config_factory):
    return NotifierExecutor("cluster-name", config_factory())


@pytest.mark.unit
class TestNotifierExecutor:
    @pytest.mark.parametrize(
        "args,channel,conf,expected,status_after",
        [
            (
                ["notifier", "start"],
                "conv-id",
                {"conv-id": False},
                "Brace yourselves, incoming notifications from cluster 'cluster-name'.",
                "Notifications from cluster 'cluster-name' are enabled here.",
            ),
            (
                ["notifier", "start"],
                "non-existing",
                {"conv-id": False},
                "I'm not configured to send notifications here ('non-existing') from cluster "
                "'cluster-name', so you cannot turn them on or off.",
                "Notifications from cluster 'cluster-name' are disabled here.",
            ),
            (
                ["notifier", "stop"],
                "conv-id",
                {"conv-id": True},
                "Sure! I won't send you notifications from cluster 'cluster-name' here.",
                "Notifications from cluster 'cluster-name' are disabled here.",
            ),
            (
                ["notifier", "stop"],
                "non-existing",
                {"conv-id": True},
                "I'm not configured to send notifications here ('non-existing') from cluster "
                "'cluster-name', so you cannot turn them on or off.",
                "Notifications from cluster 'cluster-name' are disabled here.",
            ),
        ],
    )
    def test_toggle_verbs(
        self,
        executor,
        handler_factory,
        conversation_factory,
        args,
        channel,
        conf,
        expected,
        status_after,
    ):
        handler = handler_factory(conf)
        conversation = conversation_factory(channel)

        assert executor.execute(args, conversation, handler) == expected
        assert executor.execute(STATUS, conversation, handler) == status_after

    def test_verb_is_case_insensitive(self, executor, handler_factory, conversation_factory):
        handler = handler_factory({"conv-id": False})

        executor.execute(["notifier", "START"], conversation_factory(), handler)

        assert handler.conf["conv-id"] is True

    def test_showconfig_redacts_tokens(self, executor, handler_factory, conversation_factory):
        reply = executor.execute(
            ["notifier", "showconfig"], conversation_factory(), handler_factory()
        )

        assert reply.startswith('Showing config for cluster "cluster-name":\n\n')
        assert "xoxb-token" not in reply
        assert "xapp-token" not in reply
        assert "*** REDACTED ***" in reply
        assert "socketSlack:" in reply

    def test_unknown_verb(self, executor, handler_factory, conversation_factory):
        with pytest.raises(UnsupportedCommandError, match="unsupported command"):
            executor.execute(["notifier", "foo"], conversation_factory(), handler_factory())

    @pytest.mark.parametrize(
        "args",
        [
            ["notifier"],
            ["notifier", "stop", "stop", "stop", "please", "stop!!!!1111111oneoneone"],
        ],
    )
    def test_invalid_command(self, executor, handler_factory, conversation_factory, args):
        with pytest.raises(InvalidCommandError, match="invalid command"):
            executor.execute(args, conversation_factory(), handler_factory())
