"""Fixtures for notifier module tests."""

import pytest

from infrastructure.exceptions import ChannelNotFoundError
from infrastructure.notifications.ports import Conversation


class FakeNotifierHandler:
    """In-memory NotifierHandler keyed by channel id."""

    def __init__(self, conf=None):
        self.conf = dict(conf or {})

    def notifications_enabled(self, channel_id):
        return self.conf.get(channel_id, False)

    def set_notifications_enabled(self, channel_id, enabled):
        if channel_id not in self.conf:
            raise ChannelNotFoundError(channel_id)
        self.conf[channel_id] = enabled


@pytest.fixture
def handler_factory():
    return FakeNotifierHandler


@pytest.fixture
def conversation_factory():
    def _factory(channel_id="conv-id", **kwargs):
        kwargs.setdefault("alias", "alias")
        kwargs.setdefault("platform", "socketSlack")
        return Conversation(id=channel_id, **kwargs)

    return _factory
