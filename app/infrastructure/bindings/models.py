"""Bindings configuration model.

The bot configuration declares named event sources and executors once, and
every chat channel, automated action and sink refers to them by name. This
module holds the pydantic model for that document plus the records produced
when validating it.

Example YAML:

    sources:
      k8s-events:
        kubernetes:
          namespaces:
            include: [".*"]
    executors:
      kubectl-read-only:
        kubectl:
          enabled: true
    communications:
      default-group:
        socketSlack:
          enabled: true
          botToken: xoxb-...
          appToken: xapp-...
          channels:
            default:
              name: alerts
              bindings:
                sources: [k8s-events]
                executors: [kubectl-read-only]
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ALL_NAMESPACE_INDICATOR = ".*"
REDACTED = "*** REDACTED ***"


class ValidationTag(str, Enum):
    """Tags attached to configuration validation errors."""

    INVALID_BINDING = "invalid_binding"
    NS_INCLUDE_REGEX = "ns-include-regex"
    REQUIRED = "required"
    INVALID_SLACK_TOKEN = "invalid_slack_token"


# Tags reported as warnings; everything else is critical.
WARNING_ONLY_TAGS = frozenset({ValidationTag.NS_INCLUDE_REGEX})


@dataclass(frozen=True)
class BindingError:
    """A single configuration violation.

    Attributes:
        key: dotted path of the offending field
        tag: validation tag, decides whether this is a warning or critical
        message: operator-facing message
    """

    key: str
    tag: ValidationTag
    message: str

    @property
    def is_warning(self) -> bool:
        return self.tag in WARNING_ONLY_TAGS

    def __str__(self) -> str:
        return self.message


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Namespaces(_ConfigModel):
    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)


class KubernetesResource(_ConfigModel):
    type: str
    namespaces: Optional[Namespaces] = None
    events: List[str] = Field(default_factory=list)


class EventFilter(_ConfigModel):
    types: List[str] = Field(default_factory=list)
    reason: str = ""
    message: str = ""


class KubernetesSource(_ConfigModel):
    namespaces: Namespaces = Field(default_factory=Namespaces)
    event: EventFilter = Field(default_factory=EventFilter)
    resources: List[KubernetesResource] = Field(default_factory=list)


class SourceConfig(_ConfigModel):
    display_name: str = ""
    kubernetes: KubernetesSource = Field(default_factory=KubernetesSource)


class KubectlCommands(_ConfigModel):
    verbs: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)


class KubectlExecutor(_ConfigModel):
    enabled: bool = False
    namespaces: Namespaces = Field(default_factory=Namespaces)
    commands: KubectlCommands = Field(default_factory=KubectlCommands)
    default_namespace: str = "default"
    restrict_access: bool = False


class ExecutorConfig(_ConfigModel):
    kubectl: KubectlExecutor = Field(default_factory=KubectlExecutor)


class BotBindings(_ConfigModel):
    """Sources a channel receives and executors it may invoke."""

    sources: List[str] = Field(default_factory=list)
    executors: List[str] = Field(default_factory=list)


class ActionBindings(BotBindings):
    pass


class SinkBindings(_ConfigModel):
    """Sinks only receive events, they never execute commands."""

    sources: List[str] = Field(default_factory=list)


class ChannelNotification(_ConfigModel):
    disabled: bool = False


class ChannelBindings(_ConfigModel):
    """A chat channel and what it is bound to.

    ``name`` is the platform identity (channel name for Slack, channel id
    for Discord). The key of the enclosing mapping is the channel alias.
    """

    name: str
    notification: ChannelNotification = Field(default_factory=ChannelNotification)
    bindings: BotBindings = Field(default_factory=BotBindings)


class SlackIntegration(_ConfigModel):
    """Legacy Slack bot using the RTM token only."""

    enabled: bool = False
    token: str = ""
    channels: Dict[str, ChannelBindings] = Field(default_factory=dict)


class SocketSlackIntegration(_ConfigModel):
    enabled: bool = False
    bot_token: str = ""
    app_token: str = ""
    channels: Dict[str, ChannelBindings] = Field(default_factory=dict)


class DiscordIntegration(_ConfigModel):
    enabled: bool = False
    token: str = ""
    bot_id: str = ""
    channels: Dict[str, ChannelBindings] = Field(default_factory=dict)


class WebhookIntegration(_ConfigModel):
    enabled: bool = False
    url: str = ""
    bindings: SinkBindings = Field(default_factory=SinkBindings)


class CommunicationGroup(_ConfigModel):
    slack: SlackIntegration = Field(default_factory=SlackIntegration)
    socket_slack: SocketSlackIntegration = Field(default_factory=SocketSlackIntegration)
    discord: DiscordIntegration = Field(default_factory=DiscordIntegration)
    webhook: WebhookIntegration = Field(default_factory=WebhookIntegration)


class ActionConfig(_ConfigModel):
    """Automated command run when a bound source emits an event."""

    enabled: bool = False
    display_name: str = ""
    command: str = ""
    bindings: ActionBindings = Field(default_factory=ActionBindings)


class BotConfig(_ConfigModel):
    """Root of the bindings configuration document."""

    sources: Dict[str, SourceConfig] = Field(default_factory=dict)
    executors: Dict[str, ExecutorConfig] = Field(default_factory=dict)
    actions: Dict[str, ActionConfig] = Field(default_factory=dict)
    communications: Dict[str, CommunicationGroup] = Field(default_factory=dict)

    def redacted_dump(self) -> Dict[str, Any]:
        """Dump the configuration with every token replaced by a marker."""
        data = self.model_dump(by_alias=True)
        for group in data.get("communications", {}).values():
            for platform, fields in (
                ("slack", ("token",)),
                ("socketSlack", ("botToken", "appToken")),
                ("discord", ("token",)),
            ):
                for field_name in fields:
                    if group[platform].get(field_name):
                        group[platform][field_name] = REDACTED
        return data


def load_config(path: Union[str, Path]) -> BotConfig:
    """Load the bindings configuration from a YAML file.

    Raises:
        FileNotFoundError: if the file does not exist
        pydantic.ValidationError: if the document does not match the model
    """
    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    return BotConfig.model_validate(raw)
