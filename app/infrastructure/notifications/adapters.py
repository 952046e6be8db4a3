"""Message delivery adapter abstract base class.

Every chat platform implements this interface. The delivery orchestrator
only talks to platforms through it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from infrastructure.notifications.models import InteractiveMessage
from infrastructure.operations import OperationResult


class MessageDeliveryAdapter(ABC):
    """Abstract base class for chat platform delivery.

    Implementations must not raise for platform errors: they return an
    OperationResult with an error status instead.

    Example Implementation:
        class SlackClientFacade(MessageDeliveryAdapter):

            @property
            def platform(self) -> str:
                return "socketSlack"

            def post_message(self, channel, message, thread_ts=None,
                             replace_original_url=None):
                response = self._client.chat_postMessage(...)
                return OperationResult.success(data={"ts": response["ts"]})
    """

    @property
    @abstractmethod
    def platform(self) -> str:
        """Platform identifier used in logs and analytics."""
        pass

    @abstractmethod
    def post_message(
        self,
        channel: str,
        message: InteractiveMessage,
        thread_ts: Optional[str] = None,
        replace_original_url: Optional[str] = None,
    ) -> OperationResult:
        """Post a message, or replace the original when a response URL is given.

        Returns:
            OperationResult with ``{"ts": <delivery id>}`` in data
        """
        pass

    @abstractmethod
    def post_ephemeral(
        self,
        channel: str,
        user: str,
        message: InteractiveMessage,
        thread_ts: Optional[str] = None,
    ) -> OperationResult:
        """Post a message only ``user`` can see."""
        pass

    @abstractmethod
    def open_modal(
        self, trigger_id: str, message: InteractiveMessage, private_metadata: str = ""
    ) -> OperationResult:
        """Open a modal rendered from ``message``.

        ``private_metadata`` carries the channel the modal submission
        should be answered in.
        """
        pass

    @abstractmethod
    def upload_file(
        self,
        channel: str,
        content: str,
        thread_ts: Optional[str] = None,
        filename: str = "response.txt",
    ) -> OperationResult:
        """Upload ``content`` as a file.

        Returns:
            OperationResult with an UploadedFile in data
        """
        pass
