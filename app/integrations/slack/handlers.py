"""Slack Bolt handlers.

Every handler acknowledges the request first, then hands normalized
``InboundMessage`` items to the inbound listener. Processing happens on the
listener's worker threads so Slack gets its ack within the 3 second window.
"""

import re
from typing import Callable

import structlog
from slack_bolt import Ack, App

from infrastructure.interactions.models import InboundMessage
from infrastructure.notifications.ports import AnalyticsReporter
from integrations.slack.interactions import (
    parse_app_mention,
    parse_block_actions,
    parse_view_submission,
)

logger = structlog.get_logger()

Submit = Callable[[InboundMessage], bool]

_ANY = re.compile(".*")


def register(bot: App, submit: Submit, analytics: AnalyticsReporter, platform: str):
    """Register mention, block action and view submission handlers.

    Args:
        bot: Slack Bolt application
        submit: enqueues one inbound item, returns False when it was dropped
        analytics: receives link button clicks that are not executed
        platform: platform name reported to analytics
    """

    @bot.event("app_mention")
    def handle_app_mention(ack: Ack, event: dict):
        ack()
        submit(parse_app_mention(event))

    @bot.action(_ANY)
    def handle_block_action(ack: Ack, body: dict):
        ack()
        item = parse_block_actions(body, analytics, platform)
        if item is not None:
            submit(item)

    @bot.view(_ANY)
    def handle_view_submission(ack: Ack, body: dict):
        ack()
        items = parse_view_submission(body)
        logger.debug("view_submission_received", inputs=len(items))
        for item in items:
            submit(item)
