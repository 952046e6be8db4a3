"""Cross-reference validation for the bindings configuration.

Every source and executor name used by a channel, action or sink must be
declared in the top-level ``sources`` / ``executors`` mappings. Namespace
selectors and platform tokens are checked as well. All violations are
collected; validation never stops at the first one.

Usage:
    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("configuration_warning", key=warning.key, error=warning.message)
    result.raise_for_criticals()
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping

from infrastructure.bindings.models import (
    ALL_NAMESPACE_INDICATOR,
    BindingError,
    BotConfig,
    Namespaces,
    SlackIntegration,
    SocketSlackIntegration,
    ValidationTag,
)
from infrastructure.exceptions import ConfigValidationError

APP_TOKEN_PREFIX = "xapp-"
BOT_TOKEN_PREFIX = "xoxb-"


@dataclass
class ValidationResult:
    """Critical errors block startup, warnings are only surfaced."""

    criticals: List[BindingError] = field(default_factory=list)
    warnings: List[BindingError] = field(default_factory=list)

    @property
    def has_criticals(self) -> bool:
        return bool(self.criticals)

    def add(self, error: BindingError) -> None:
        if error.is_warning:
            self.warnings.append(error)
        else:
            self.criticals.append(error)

    def raise_for_criticals(self) -> None:
        if self.criticals:
            raise ConfigValidationError(self.criticals)


def _error(key: str, tag: ValidationTag, text: str) -> BindingError:
    return BindingError(key=key, tag=tag, message=f"Key: '{key}' {text}")


def validate_config(config: BotConfig) -> ValidationResult:
    """Validate bindings, namespace selectors and tokens of ``config``.

    Args:
        config: parsed bindings configuration

    Returns:
        ValidationResult with disjoint criticals and warnings
    """
    result = ValidationResult()

    for name, source in config.sources.items():
        prefix = f"Config.Sources[{name}].Kubernetes"
        _validate_namespaces(result, f"{prefix}.Namespaces", source.kubernetes.namespaces)
        for idx, resource in enumerate(source.kubernetes.resources):
            if resource.namespaces is not None:
                _validate_namespaces(
                    result, f"{prefix}.Resources[{idx}].Namespaces", resource.namespaces
                )

    for name, executor in config.executors.items():
        _validate_namespaces(
            result, f"Config.Executors[{name}].Kubectl.Namespaces", executor.kubectl.namespaces
        )

    for name, action in config.actions.items():
        key = f"Config.Actions[{name}].Bindings"
        _validate_bindings(result, f"{key}.Sources", action.bindings.sources, config.sources, "Config.Sources")
        _validate_bindings(
            result, f"{key}.Executors", action.bindings.executors, config.executors, "Config.Executors"
        )

    for group_name, group in config.communications.items():
        prefix = f"Config.Communications[{group_name}]"
        for platform, channels in (
            ("Slack", group.slack.channels),
            ("SocketSlack", group.socket_slack.channels),
            ("Discord", group.discord.channels),
        ):
            for alias, channel in channels.items():
                key = f"{prefix}.{platform}.Channels[{alias}].Bindings"
                _validate_bindings(
                    result, f"{key}.Sources", channel.bindings.sources, config.sources, "Config.Sources"
                )
                _validate_bindings(
                    result,
                    f"{key}.Executors",
                    channel.bindings.executors,
                    config.executors,
                    "Config.Executors",
                )

        _validate_bindings(
            result,
            f"{prefix}.Webhook.Bindings.Sources",
            group.webhook.bindings.sources,
            config.sources,
            "Config.Sources",
        )
        _validate_slack_token(result, f"{prefix}.Slack", group.slack)
        _validate_socket_slack_tokens(result, f"{prefix}.SocketSlack", group.socket_slack)

    return result


def _validate_bindings(
    result: ValidationResult,
    key: str,
    bindings: Iterable[str],
    declared: Mapping[str, object],
    declared_in: str,
) -> None:
    for name in bindings:
        if name not in declared:
            result.add(
                _error(
                    f"{key}.{name}",
                    ValidationTag.INVALID_BINDING,
                    f"'{name}' binding not defined in {declared_in}",
                )
            )


def _validate_namespaces(result: ValidationResult, key: str, namespaces: Namespaces) -> None:
    if len(namespaces.include) < 2:
        return

    if ALL_NAMESPACE_INDICATOR in namespaces.include:
        result.add(
            _error(
                f"{key}.Include",
                ValidationTag.NS_INCLUDE_REGEX,
                "Include matches both all and exact namespaces",
            )
        )


def _prefix_message(prefix: str) -> str:
    return f"must have the {prefix} prefix"


def _validate_slack_token(result: ValidationResult, key: str, slack: SlackIntegration) -> None:
    if not slack.enabled:
        return

    if not slack.token:
        result.add(
            _error(
                f"{key}.Token",
                ValidationTag.REQUIRED,
                f"Token is a required field with the {BOT_TOKEN_PREFIX} prefix",
            )
        )
        return

    if not slack.token.startswith(BOT_TOKEN_PREFIX):
        result.add(
            _error(
                f"{key}.Token",
                ValidationTag.INVALID_SLACK_TOKEN,
                f"Token {_prefix_message(BOT_TOKEN_PREFIX)}",
            )
        )


def _validate_socket_slack_tokens(
    result: ValidationResult, key: str, slack: SocketSlackIntegration
) -> None:
    if not slack.enabled:
        return

    for field_name, value, prefix in (
        ("BotToken", slack.bot_token, BOT_TOKEN_PREFIX),
        ("AppToken", slack.app_token, APP_TOKEN_PREFIX),
    ):
        if not value:
            result.add(
                _error(
                    f"{key}.{field_name}",
                    ValidationTag.REQUIRED,
                    f"{field_name} is a required field with the {prefix} prefix",
                )
            )
            continue
        if not value.startswith(prefix):
            result.add(
                _error(
                    f"{key}.{field_name}",
                    ValidationTag.INVALID_SLACK_TOKEN,
                    f"{field_name} {_prefix_message(prefix)}",
                )
            )
