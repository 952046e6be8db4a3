"""Channel registry.

Owns the map of bound chat channels and their runtime ``notify`` flag.
Readers get snapshots; the only mutation is ``set_notify``.

Locking:
    - the map is guarded by a read/write lock: concurrent readers, one
      exclusive writer
    - a separate mutex serializes the notify toggle, which reads the map,
      changes one entry and writes the whole map back

Usage:
    registry = ChannelRegistry.from_bindings(config.socket_slack.channels)
    registry.set_notify("alerts", False)
    registry.notifications_enabled("alerts")  # False
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Mapping, Optional, Tuple

from infrastructure.bindings.models import ChannelBindings
from infrastructure.exceptions import ChannelNotFoundError
from infrastructure.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class ChannelConfig:
    """Bound chat channel.

    Attributes:
        name: platform identity (channel name or id)
        alias: configured alias
        notify: whether event notifications are delivered here
        source_bindings: sources whose events this channel receives
        executor_bindings: executors this channel may invoke
    """

    name: str
    alias: str = ""
    notify: bool = True
    source_bindings: Tuple[str, ...] = ()
    executor_bindings: Tuple[str, ...] = ()

    @property
    def identifier(self) -> str:
        return self.name

    @classmethod
    def from_bindings(cls, alias: str, channel: ChannelBindings) -> "ChannelConfig":
        return cls(
            name=channel.name,
            alias=alias,
            notify=not channel.notification.disabled,
            source_bindings=tuple(channel.bindings.sources),
            executor_bindings=tuple(channel.bindings.executors),
        )


class ReadWriteLock:
    """Read-preferring read/write lock.

    Readers only wait for an active writer; a writer waits until no reader
    or writer holds the lock.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ChannelRegistry:
    """Concurrency-safe store of bound channels keyed by channel name."""

    def __init__(self, channels: Optional[Mapping[str, ChannelConfig]] = None):
        self._channels: Dict[str, ChannelConfig] = dict(channels or {})
        self._lock = ReadWriteLock()
        self._notify_lock = threading.Lock()

    @classmethod
    def from_bindings(cls, channels: Mapping[str, ChannelBindings]) -> "ChannelRegistry":
        """Build a registry from configured channels keyed by alias."""
        configs = {}
        for alias, channel in channels.items():
            config = ChannelConfig.from_bindings(alias, channel)
            configs[config.name] = config
        logger.info("channel_registry_created", channels=sorted(configs))
        return cls(configs)

    def get(self) -> Dict[str, ChannelConfig]:
        """Return a snapshot of the channel map.

        Entries are immutable, so the copy can be iterated while toggles
        happen concurrently.
        """
        with self._lock.read_lock():
            return dict(self._channels)

    def _set(self, channels: Dict[str, ChannelConfig]) -> None:
        with self._lock.write_lock():
            self._channels = channels

    def lookup(self, name: str) -> Optional[ChannelConfig]:
        return self.get().get(name)

    def notifications_enabled(self, name: str) -> bool:
        """Current notify flag; False for channels the bot is not bound to."""
        channel = self.lookup(name)
        if channel is None:
            return False
        return channel.notify

    def set_notify(self, name: str, enabled: bool) -> None:
        """Set the notify flag of an existing channel.

        Raises:
            ChannelNotFoundError: if ``name`` is not a bound channel
        """
        with self._notify_lock:
            channels = self.get()
            channel = channels.get(name)
            if channel is None:
                raise ChannelNotFoundError(name)

            channels[name] = replace(channel, notify=enabled)
            self._set(channels)

        logger.info("channel_notifications_toggled", channel=name, enabled=enabled)

    def __contains__(self, name: object) -> bool:
        return name in self.get()

    def __len__(self) -> int:
        return len(self.get())
