"""Inbound message listener.

Slack handlers only acknowledge and enqueue. Worker threads drain a
bounded queue and run the bot's handler for each item. ``stop()`` sets the
cancellation event, which is also passed to the handler so in-flight
deliveries stop early.
"""

import queue
import threading
from typing import Callable, List, Optional

from infrastructure.interactions.models import InboundMessage
from infrastructure.logging import get_module_logger

logger = get_module_logger()

Handler = Callable[[InboundMessage, threading.Event], None]

_POLL_SECONDS = 0.5


class InboundListener:
    """Bounded queue of inbound items drained by worker threads.

    Args:
        handler: called as ``handler(item, cancel)`` for every item
        queue_size: queue capacity; items submitted to a full queue are dropped
        workers: number of consumer threads
    """

    def __init__(self, handler: Handler, queue_size: int = 100, workers: int = 2):
        self.handler = handler
        self.workers = workers
        self.cancel = threading.Event()
        self._queue: "queue.Queue[InboundMessage]" = queue.Queue(maxsize=queue_size)
        self._threads: List[threading.Thread] = []

    def submit(self, item: InboundMessage) -> bool:
        """Enqueue ``item`` without blocking the caller.

        Returns:
            False when the listener is stopped or the queue is full
        """
        if self.cancel.is_set():
            logger.warning("inbound_listener_stopped", channel=item.channel)
            return False
        try:
            self._queue.put_nowait(item)
        except queue.Full:
            logger.error(
                "inbound_queue_full",
                channel=item.channel,
                capacity=self._queue.maxsize,
            )
            return False
        return True

    def start(self) -> None:
        for idx in range(self.workers):
            thread = threading.Thread(
                target=self._run, name=f"inbound-{idx}", daemon=True
            )
            thread.start()
            self._threads.append(thread)
        logger.info("inbound_listener_started", workers=self.workers)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel processing and wait for the workers to exit."""
        self.cancel.set()
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []
        logger.info("inbound_listener_stopped", pending=self._queue.qsize())

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def _run(self) -> None:
        while not self.cancel.is_set():
            try:
                item = self._queue.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                continue
            try:
                self.handler(item, self.cancel)
            except Exception as e:
                logger.exception(
                    "inbound_message_failed", channel=item.channel, error=str(e)
                )
            finally:
                self._queue.task_done()
