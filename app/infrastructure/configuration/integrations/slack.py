"""Slack integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class SlackSettings(IntegrationSettings):
    """Slack API and bot configuration.

    Environment Variables:
        SLACK_ENABLED: Whether the Slack socket mode bot is started
        APP_TOKEN: Slack app-level token (xapp-*)
        SLACK_TOKEN: Slack bot token (xoxb-*)
        SLACK_MAX_MESSAGE_SIZE: Rendered size at which responses are uploaded as files

    Example:
        ```python
        from infrastructure.configuration import settings

        slack_token = settings.slack.SLACK_TOKEN
        ```
    """

    SLACK_ENABLED: bool = False
    APP_TOKEN: str = ""
    SLACK_TOKEN: str = ""
    SLACK_MAX_MESSAGE_SIZE: int = 3001
