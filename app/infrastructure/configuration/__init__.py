"""Infrastructure configuration module - public API.

Centralized runtime configuration for the ChatOps bot using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.configuration import settings

    slack_token = settings.slack.SLACK_TOKEN
    cluster = settings.bot.CLUSTER_NAME
    ```
"""

from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "settings"]
