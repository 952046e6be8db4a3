"""Shared fixtures for the bot test suite."""

from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.bindings.models import BotConfig, ChannelBindings
from infrastructure.notifications.adapters import MessageDeliveryAdapter
from infrastructure.notifications.registry import ChannelConfig, ChannelRegistry
from infrastructure.operations import OperationResult


@pytest.fixture
def config_factory():
    """Factory for BotConfig documents.

    Example:
        config = config_factory(
            sources=["k8s-events"],
            channels={"default": {"name": "alerts", "bindings": {"sources": ["k8s-events"]}}},
        )
    """

    def _factory(
        sources: Optional[List[str]] = None,
        executors: Optional[List[str]] = None,
        channels: Optional[Dict[str, dict]] = None,
        bot_token: str = "xoxb-token",
        app_token: str = "xapp-token",
        **extra,
    ) -> BotConfig:
        raw = {
            "sources": {name: {} for name in sources or []},
            "executors": {name: {} for name in executors or []},
            "communications": {
                "default-group": {
                    "socketSlack": {
                        "enabled": True,
                        "botToken": bot_token,
                        "appToken": app_token,
                        "channels": channels or {},
                    }
                }
            },
        }
        raw.update(extra)
        return BotConfig.model_validate(raw)

    return _factory


@pytest.fixture
def channel_factory():
    """Factory for ChannelConfig entries."""

    def _factory(
        name: str = "alerts",
        notify: bool = True,
        sources: tuple = ("k8s-events",),
        executors: tuple = (),
        alias: str = "",
    ) -> ChannelConfig:
        return ChannelConfig(
            name=name,
            alias=alias or name,
            notify=notify,
            source_bindings=tuple(sources),
            executor_bindings=tuple(executors),
        )

    return _factory


@pytest.fixture
def registry_factory(channel_factory):
    """Build a ChannelRegistry from ChannelConfig entries."""

    def _factory(*channels: ChannelConfig) -> ChannelRegistry:
        return ChannelRegistry({channel.name: channel for channel in channels})

    return _factory


@pytest.fixture
def channel_bindings():
    def _factory(name: str = "alerts", sources=(), executors=(), disabled=False):
        return ChannelBindings.model_validate(
            {
                "name": name,
                "notification": {"disabled": disabled},
                "bindings": {"sources": list(sources), "executors": list(executors)},
            }
        )

    return _factory


@pytest.fixture
def mock_adapter():
    """MessageDeliveryAdapter mock whose calls succeed by default."""
    adapter = MagicMock(spec=MessageDeliveryAdapter)
    adapter.platform = "socketSlack"
    adapter.post_message.return_value = OperationResult.success(data={"ts": "1.0"})
    adapter.post_ephemeral.return_value = OperationResult.success(data={"ts": "2.0"})
    adapter.open_modal.return_value = OperationResult.success(data={"view_id": "V1"})
    adapter.upload_file.return_value = OperationResult.success(data=None)
    return adapter
