"""Unit tests for the command dispatcher."""

from unittest.mock import MagicMock

import pytest

from infrastructure.exceptions import InvalidCommandError
from infrastructure.interactions.models import CommandOrigin, GenericCommand
from modules.notifier.dispatcher import CommandDispatcher


@pytest.fixture
def analytics():
    return MagicMock()


@pytest.fixture
def dispatcher(analytics):
    return CommandDispatcher(platform="socketSlack", analytics=analytics)


def _command(text, origin=CommandOrigin.TYPED):
    return GenericCommand(text=text, origin=origin)


@pytest.mark.unit
class TestCommandDispatcher:
    def test_routes_by_first_word(self, dispatcher, handler_factory, conversation_factory):
        route = MagicMock(return_value="done")
        dispatcher.register("notifier", route)
        handler = handler_factory()
        conversation = conversation_factory()

        message = dispatcher.execute(_command("Notifier start"), conversation, handler)

        route.assert_called_once_with(["Notifier", "start"], conversation, handler)
        assert message.render() == "done"

    def test_quoted_arguments_stay_together(
        self, dispatcher, handler_factory, conversation_factory
    ):
        route = MagicMock(return_value="ok")
        dispatcher.register("logs", route)

        dispatcher.execute(_command('logs "error level"'), conversation_factory(), handler_factory())

        assert route.call_args.args[0] == ["logs", "error level"]

    def test_code_block_reply(self, dispatcher, handler_factory, conversation_factory):
        dispatcher.register("notifier", MagicMock(return_value="a: 1"), code_block=True)

        message = dispatcher.execute(
            _command("notifier showconfig"), conversation_factory(), handler_factory()
        )

        assert message.base_body.code_block == "a: 1"

    def test_command_error_becomes_reply(
        self, dispatcher, handler_factory, conversation_factory
    ):
        dispatcher.register("notifier", MagicMock(side_effect=InvalidCommandError()))

        message = dispatcher.execute(_command("notifier"), conversation_factory(), handler_factory())

        assert message.render() == "invalid command"

    def test_unknown_command_lists_available(
        self, dispatcher, handler_factory, conversation_factory
    ):
        dispatcher.register("notifier", MagicMock())

        message = dispatcher.execute(_command("kubectl get pods"), conversation_factory(), handler_factory())

        assert message.render() == "Command not supported. Available commands: `notifier`."

    def test_unbalanced_quotes(self, dispatcher, handler_factory, conversation_factory):
        message = dispatcher.execute(_command('logs "oops'), conversation_factory(), handler_factory())

        assert message.render().startswith("invalid command")

    def test_reports_command_to_analytics(
        self, dispatcher, analytics, handler_factory, conversation_factory
    ):
        dispatcher.register("notifier", MagicMock(return_value="ok"))

        dispatcher.execute(
            _command("notifier stop", CommandOrigin.BUTTON_CLICK),
            conversation_factory(),
            handler_factory(),
        )

        analytics.report_command.assert_called_once_with(
            "socketSlack", "notifier stop", CommandOrigin.BUTTON_CLICK, False
        )
