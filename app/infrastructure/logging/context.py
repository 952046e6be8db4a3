"""Request context binding for structured logging.

Binds per-interaction context (correlation id, channel, user, command
origin) so every log line emitted while handling one inbound chat message
carries it.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(channel="C123", user_id="U42"):
        logger.info("handling_message")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    channel: Optional[str] = None,
    user_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind context to all logs emitted within the block.

    Args:
        correlation_id: Unique identifier. Auto-generated if not provided.
        channel: Chat channel the interaction came from.
        user_id: Platform user id of the requester.
        **extra_context: Additional key-value pairs to include in logs.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if channel is not None:
        context["channel"] = channel

    if user_id is not None:
        context["user_id"] = user_id

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
