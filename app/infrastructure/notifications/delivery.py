"""Delivery orchestrator.

Fans one rendered message out to many targets through a
MessageDeliveryAdapter:

- every target is delivered independently; failures are collected in the
  report instead of aborting the batch
- messages at or above the size limit are uploaded as a file, then a
  fallback message keeping only the text inputs is posted
- popups open a modal when a trigger id is available, otherwise they are
  posted like any other message
- ephemeral and replace-original messages use the matching adapter path
- an external cancellation event aborts the batch: targets whose delivery
  has not completed are reported as cancelled and `deliver` returns at once
- a channel listed more than once is delivered to once

Usage:
    orchestrator = DeliveryOrchestrator(adapter, max_message_size=3001)
    report = orchestrator.deliver([DeliveryTarget(channel="alerts")], message)
    report.raise_for_failures()
"""

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Sequence, Union

from infrastructure.interactions.resolver import resolve_thread_target
from infrastructure.logging import get_module_logger
from infrastructure.notifications.adapters import MessageDeliveryAdapter
from infrastructure.notifications.models import (
    DeliveryFailure,
    DeliveryReport,
    DeliveryTarget,
    InteractiveMessage,
    MessageType,
)
from infrastructure.operations import OperationResult

logger = get_module_logger()

# How often a waiting batch checks the cancellation event.
_CANCEL_POLL_SECONDS = 0.05


class DeliveryCancelled(Exception):
    pass


class DeliveryFailureError(Exception):
    """Internal carrier for a failure raised inside a worker."""

    def __init__(self, failure: DeliveryFailure):
        super().__init__(str(failure))
        self.failure = failure


class DeliveryOrchestrator:
    """Delivers messages to chat targets with bounded parallelism.

    Attributes:
        adapter: platform adapter used for every call
        max_message_size: rendered length at which content is uploaded as a file
        max_workers: upper bound on concurrent per-target deliveries
    """

    def __init__(
        self,
        adapter: MessageDeliveryAdapter,
        max_message_size: int,
        max_workers: int = 4,
    ):
        self.adapter = adapter
        self.max_message_size = max_message_size
        self.max_workers = max_workers

    def deliver(
        self,
        targets: Sequence[Union[DeliveryTarget, str]],
        message: InteractiveMessage,
        cancel: Optional[threading.Event] = None,
    ) -> DeliveryReport:
        """Deliver ``message`` to every target.

        Args:
            targets: delivery targets, plain strings are treated as channel names
            message: message to deliver
            cancel: optional cancellation event shared with the caller

        Returns:
            DeliveryReport; call ``raise_for_failures()`` to turn failures
            into a DeliveryError
        """
        cancel = cancel or threading.Event()
        normalized = [
            target if isinstance(target, DeliveryTarget) else DeliveryTarget(channel=target)
            for target in targets
        ]
        normalized = _unique_channels(normalized)
        report = DeliveryReport()
        if not normalized:
            return report

        if cancel.is_set():
            report.cancelled.extend(target.channel for target in normalized)
            return report

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(normalized)),
            thread_name_prefix="delivery",
        )
        futures: Dict[Future, DeliveryTarget] = {
            executor.submit(self._deliver_one, target, message, cancel): target
            for target in normalized
        }
        pending = set(futures)
        try:
            while pending:
                done, pending = wait(
                    pending, timeout=_CANCEL_POLL_SECONDS, return_when=FIRST_COMPLETED
                )
                for future in done:
                    self._collect(report, futures[future], future)

                if pending and cancel.is_set():
                    for future in pending:
                        if future.done():
                            self._collect(report, futures[future], future)
                        else:
                            future.cancel()
                            report.cancelled.append(futures[future].channel)
                    logger.warning(
                        "delivery_cancelled",
                        cancelled=len(report.cancelled),
                        delivered=len(report.delivered),
                    )
                    pending = set()
        finally:
            # workers still inside an adapter call exit on their own
            executor.shutdown(wait=False, cancel_futures=True)

        # keep target order stable for callers and logs
        order = {target.channel: idx for idx, target in enumerate(normalized)}
        report.failures.sort(key=lambda failure: order.get(failure.channel, 0))

        if report.failures:
            logger.error(
                "delivery_failed",
                failed_channels=[failure.channel for failure in report.failures],
                delivered=len(report.delivered),
            )
        else:
            logger.debug("delivery_succeeded", delivered=len(report.delivered))

        return report

    def _collect(self, report: DeliveryReport, target: DeliveryTarget, future: Future) -> None:
        try:
            delivery_id = future.result()
        except DeliveryCancelled:
            report.cancelled.append(target.channel)
        except DeliveryFailureError as e:
            report.failures.append(e.failure)
        except Exception as e:
            logger.exception("delivery_exception", channel=target.channel, error=str(e))
            report.failures.append(DeliveryFailure(channel=target.channel, reason=str(e)))
        else:
            report.delivered[target.channel] = delivery_id

    def _deliver_one(
        self,
        target: DeliveryTarget,
        message: InteractiveMessage,
        cancel: threading.Event,
    ) -> Optional[str]:
        if cancel.is_set():
            raise DeliveryCancelled()

        rendered = message.render()
        if not rendered and not message.plaintext_inputs:
            _fail(target, "while reading response: empty response")

        uploaded_file = None
        if len(rendered) >= self.max_message_size:
            result = self.adapter.upload_file(
                target.channel, rendered, thread_ts=target.thread_ts or None
            )
            _check(target, result, "while uploading file")
            uploaded_file = result.data
            message = message.fallback()
            logger.info(
                "message_uploaded_as_file",
                channel=target.channel,
                size=len(rendered),
                max_size=self.max_message_size,
            )
            if cancel.is_set():
                raise DeliveryCancelled()

        if message.type == MessageType.POPUP and target.trigger_id:
            result = self.adapter.open_modal(
                target.trigger_id, message, private_metadata=target.channel
            )
            _check(target, result, "while opening modal")
            return None

        thread_ts = resolve_thread_target(target.thread_ts, uploaded_file)

        if message.only_visible_for_you:
            result = self.adapter.post_ephemeral(
                target.channel, target.user, message, thread_ts=thread_ts
            )
            _check(target, result, "while posting message visible only to user")
            return _delivery_id(result)

        replace_url = None
        if message.replace_original and target.response_url:
            replace_url = target.response_url

        result = self.adapter.post_message(
            target.channel,
            message,
            thread_ts=thread_ts,
            replace_original_url=replace_url,
        )
        _check(target, result, "while posting message")
        return _delivery_id(result)


def _fail(target: DeliveryTarget, reason: str, error_code: Optional[str] = None):
    raise DeliveryFailureError(
        DeliveryFailure(channel=target.channel, reason=reason, error_code=error_code)
    )


def _check(target: DeliveryTarget, result: OperationResult, action: str) -> None:
    if not result.is_success:
        _fail(target, f"{action}: {result.message}", result.error_code)


def _delivery_id(result: OperationResult) -> Optional[str]:
    if isinstance(result.data, dict):
        return result.data.get("ts")
    return None


def _unique_channels(targets: Sequence[DeliveryTarget]) -> List[DeliveryTarget]:
    seen = set()
    unique = []
    for target in targets:
        if target.channel in seen:
            logger.debug("duplicate_delivery_target", channel=target.channel)
            continue
        seen.add(target.channel)
        unique.append(target)
    return unique
