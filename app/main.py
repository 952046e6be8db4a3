from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from infrastructure.bindings import BotConfig, ChannelBindings, load_config, validate_config
from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger
from infrastructure.notifications import (
    ChannelRegistry,
    DeliveryOrchestrator,
    LoggingAnalyticsReporter,
    NotificationRouter,
)
from infrastructure.platforms.clients.slack import SlackClientFacade
from integrations.slack import handlers
from integrations.slack.interactions import BotMention
from modules.notifier import NOTIFIER_COMMAND, CommandDispatcher, NotifierExecutor
from server.bot import ChatOpsBot
from server.listener import InboundListener

logger = get_module_logger()

load_dotenv()


def main():
    """Main function to start the application."""
    logger.info("application_startup", git_sha=settings.GIT_SHA)
    list_configs()

    config = load_bot_config(settings.bot.BOT_CONFIG_PATH)
    channels, bot_token, app_token = socket_slack_settings(config)

    adapter = SlackClientFacade(token=bot_token)
    auth = adapter.get_bot_user_id()
    if not auth.is_success:
        raise RuntimeError(f"Unable to identify the bot user: {auth.message}")
    mention = BotMention(auth.data["user_id"])

    analytics = LoggingAnalyticsReporter()
    dispatcher = CommandDispatcher(platform=adapter.platform, analytics=analytics)
    notifier = NotifierExecutor(settings.bot.CLUSTER_NAME, config)
    dispatcher.register(NOTIFIER_COMMAND, notifier.execute, code_block=True)

    registry = ChannelRegistry.from_bindings(channels)
    chatops = ChatOpsBot(
        registry=registry,
        router=NotificationRouter(registry),
        orchestrator=DeliveryOrchestrator(
            adapter,
            max_message_size=settings.slack.SLACK_MAX_MESSAGE_SIZE,
            max_workers=settings.delivery.DELIVERY_MAX_WORKERS,
        ),
        executor=dispatcher,
        adapter=adapter,
        mention=mention,
        cluster_name=settings.bot.CLUSTER_NAME,
    )

    listener = InboundListener(
        chatops.handle,
        queue_size=settings.bot.INBOUND_QUEUE_SIZE,
        workers=settings.bot.INBOUND_WORKERS,
    )
    listener.start()

    bot = App(token=bot_token, client=adapter.raw_client)
    handlers.register(bot, listener.submit, analytics, adapter.platform)

    try:
        SocketModeHandler(bot, app_token).start()
    finally:
        listener.stop(timeout=5)
        logger.info("application_shutdown")


def load_bot_config(path: str) -> BotConfig:
    """Load and validate the bindings config.

    Warnings are logged; any critical error aborts startup.

    Raises:
        ConfigValidationError: if the config has critical errors
    """
    config = apply_token_overrides(load_config(path))
    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("configuration_warning", key=warning.key, message=warning.message)
    result.raise_for_criticals()
    logger.info("configuration_validated", path=path, warnings=len(result.warnings))
    return config


def apply_token_overrides(config: BotConfig) -> BotConfig:
    """Fill empty Socket Slack tokens from SLACK_TOKEN / APP_TOKEN."""
    for group in config.communications.values():
        socket_slack = group.socket_slack
        if not socket_slack.enabled:
            continue
        socket_slack.bot_token = socket_slack.bot_token or settings.slack.SLACK_TOKEN
        socket_slack.app_token = socket_slack.app_token or settings.slack.APP_TOKEN
    return config


def socket_slack_settings(
    config: BotConfig,
) -> Tuple[Dict[str, ChannelBindings], str, str]:
    """Channels and tokens of the first enabled Socket Slack integration."""
    group_name: Optional[str] = None
    for name, group in config.communications.items():
        if group.socket_slack.enabled:
            group_name = name
            break

    if group_name is None:
        logger.warning("socket_slack_not_configured")
        return {}, settings.slack.SLACK_TOKEN, settings.slack.APP_TOKEN

    socket_slack = config.communications[group_name].socket_slack
    logger.info(
        "socket_slack_selected",
        communication_group=group_name,
        channels=sorted(socket_slack.channels),
    )
    return (
        dict(socket_slack.channels),
        socket_slack.bot_token,
        socket_slack.app_token,
    )


def list_configs():
    """List all configuration settings keys"""
    base_settings = []
    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            logger.info("configuration_loaded", config_setting=key, keys=list(value.keys()))
        else:
            base_settings.append({key: value})

    logger.info("configuration_initialized", base_settings=base_settings)


if __name__ == "__main__":
    if settings.slack.SLACK_ENABLED:
        main()
    else:
        logger.warning("slack_disabled")
