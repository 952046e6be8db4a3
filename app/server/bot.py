"""ChatOps bot runtime.

Ties the pieces together for one chat platform:

- inbound items are resolved to a command, executed, and the reply is
  delivered back to where the interaction came from
- cluster events are routed to bound channels and delivered with an
  event-commands section for channels allowed to run the offered actions
- the bot is the NotifierHandler executors use to toggle notifications
"""

import threading
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from infrastructure.events.models import Action, Event
from infrastructure.interactions.models import CommandOrigin, GenericCommand, InboundMessage
from infrastructure.interactions.resolver import resolve
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.notifications.delivery import DeliveryOrchestrator
from infrastructure.notifications.models import (
    Body,
    Button,
    DeliveryReport,
    DeliveryTarget,
    InteractiveMessage,
    Section,
    TextField,
)
from infrastructure.notifications.ports import CommandExecutor, Conversation
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.notifications.router import NotificationRouter
from infrastructure.platforms.clients.slack import SlackClientFacade
from integrations.slack.interactions import BotMention

logger = get_module_logger()


class ChatOpsBot:
    """Bot bound to one chat workspace.

    Args:
        registry: bound channels keyed by channel name
        router: computes event targets from the registry
        orchestrator: delivers messages through the platform adapter
        executor: runs resolved commands
        adapter: platform client, used to resolve channel names
        mention: detects the bot mention in command text
        cluster_name: cluster named in event messages
    """

    def __init__(
        self,
        registry: ChannelRegistry,
        router: NotificationRouter,
        orchestrator: DeliveryOrchestrator,
        executor: CommandExecutor,
        adapter: SlackClientFacade,
        mention: BotMention,
        cluster_name: str,
    ):
        self.registry = registry
        self.router = router
        self.orchestrator = orchestrator
        self.executor = executor
        self.adapter = adapter
        self.mention = mention
        self.cluster_name = cluster_name
        self._channel_names: Dict[str, str] = {}
        self._names_lock = threading.Lock()

    @property
    def platform(self) -> str:
        return self.adapter.platform

    # NotifierHandler

    def notifications_enabled(self, channel_id: str) -> bool:
        return self.registry.notifications_enabled(channel_id)

    def set_notifications_enabled(self, channel_id: str, enabled: bool) -> None:
        """Toggle notifications.

        Raises:
            ChannelNotFoundError: if the channel is not bound
        """
        self.registry.set_notify(channel_id, enabled)

    # Inbound

    def handle(self, item: InboundMessage, cancel: Optional[threading.Event] = None) -> None:
        """Execute the command carried by ``item`` and deliver the reply."""
        with bind_request_context(channel=item.channel, user_id=item.user):
            command = self._command(item)
            if command is None:
                return

            channel_name = self._channel_name(item.channel)
            channel = self.registry.lookup(channel_name)
            conversation = Conversation(
                id=channel_name,
                alias=channel.alias if channel else "",
                platform=self.platform,
                user=f"<@{item.user}>" if item.user else "",
                executor_bindings=channel.executor_bindings if channel else (),
                is_authenticated=channel is not None,
                command_origin=command.origin,
            )

            message = self.executor.execute(command, conversation, self)
            target = DeliveryTarget(
                channel=item.channel,
                user=item.user,
                thread_ts=item.thread_ts,
                trigger_id=item.trigger_id,
                response_url=item.response_url,
                block_id=item.block_id,
                command_origin=command.origin,
            )
            report = self.orchestrator.deliver([target], message, cancel)
            if report.failures:
                logger.error(
                    "response_delivery_failed",
                    errors=[str(failure) for failure in report.failures],
                )

    def _command(self, item: InboundMessage) -> Optional[GenericCommand]:
        if item.payload is not None:
            resolved = resolve(item.payload)
            text, origin = resolved.text, resolved.origin
        else:
            text, origin = item.text, item.command_origin

        request, found = self.mention.find_and_trim(text)
        if not found:
            logger.debug("message_without_bot_mention", origin=origin.value)
            return None
        return GenericCommand(text=request, origin=origin)

    def _channel_name(self, channel_id: str) -> str:
        """Bindings are declared by channel name; Slack sends ids."""
        with self._names_lock:
            cached = self._channel_names.get(channel_id)
        if cached:
            return cached

        result = self.adapter.get_conversation_name(channel_id)
        if not result.is_success or not result.data.get("name"):
            logger.warning(
                "channel_name_lookup_failed", channel_id=channel_id, error=result.message
            )
            return channel_id

        name = result.data["name"]
        with self._names_lock:
            self._channel_names[channel_id] = name
        return name

    # Outbound

    def send_event(
        self,
        event: Event,
        source_bindings: Sequence[str],
        cancel: Optional[threading.Event] = None,
    ) -> DeliveryReport:
        """Notify every channel the event routes to.

        Channels bound to the executors of the event's actions get the
        actions as buttons; the rest get the plain notification.
        """
        targets = self.router.targets(event, source_bindings)
        if not targets:
            logger.debug("event_without_targets", title=event.title)
            return DeliveryReport()

        groups: Dict[Tuple[Action, ...], List[str]] = {}
        for target in targets:
            groups.setdefault(self._allowed_actions(target, event.actions), []).append(target)

        report = DeliveryReport()
        for actions, channels in groups.items():
            message = event_message(event, actions)
            _merge(report, self.orchestrator.deliver(channels, message, cancel))

        logger.info(
            "event_sent",
            title=event.title,
            delivered=len(report.delivered),
            failed=len(report.failures),
        )
        return report

    def send_generic_message(
        self,
        message: InteractiveMessage,
        source_bindings: Sequence[str],
        cancel: Optional[threading.Event] = None,
    ) -> DeliveryReport:
        """Send an automation message to enabled channels bound to the sources."""
        targets = [
            DeliveryTarget(channel=channel, command_origin=CommandOrigin.AUTOMATION)
            for channel in self.router.targets_for_bindings(source_bindings)
        ]
        return self.orchestrator.deliver(targets, message, cancel)

    def send_message_to_all(
        self, message: InteractiveMessage, cancel: Optional[threading.Event] = None
    ) -> DeliveryReport:
        """Send ``message`` to every bound channel, whatever its notify flag."""
        channels = sorted(channel.identifier for channel in self.registry.get().values())
        return self.orchestrator.deliver(channels, message, cancel)

    def _allowed_actions(self, channel_name: str, actions: Iterable[Action]) -> Tuple[Action, ...]:
        channel = self.registry.lookup(channel_name)
        if channel is None:
            return ()
        bound = set(channel.executor_bindings)
        return tuple(action for action in actions if bound.intersection(action.executor_bindings))


def event_message(event: Event, actions: Sequence[Action] = ()) -> InteractiveMessage:
    """Build the notification for ``event``."""
    fields = [
        TextField(key=key, value=value)
        for key, value in (
            ("Kind", event.kind),
            ("Name", event.name),
            ("Namespace", event.namespace),
            ("Reason", event.reason),
            ("Cluster", event.cluster),
        )
        if value
    ]
    sections = [Section(text_fields=fields)]

    if event.messages:
        sections.append(
            Section(header="Messages", base_body=Body(plaintext="\n".join(event.messages)))
        )
    if event.recommendations:
        sections.append(
            Section(header="Recommendations", context=[f"• {r}" for r in event.recommendations])
        )
    if event.warnings:
        sections.append(Section(header="Warnings", context=[f"• {w}" for w in event.warnings]))
    if actions:
        sections.append(
            Section(
                header="Run command",
                buttons=[
                    Button(name=action.display_name or action.command, command=action.command)
                    for action in actions
                ],
            )
        )

    return InteractiveMessage(
        header=f"{event.level.value.upper()}: {event.title}",
        base_body=Body(plaintext=event.summary() or ""),
        sections=sections,
    )


def _merge(report: DeliveryReport, other: DeliveryReport) -> None:
    report.delivered.update(other.delivered)
    report.failures.extend(other.failures)
    report.cancelled.extend(other.cancelled)
