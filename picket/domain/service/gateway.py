"""Outbound delivery gateways.

Implementations live in the adapter layer (SMTP, Web Push) and raise
``picket.adapter.error.UpstreamError`` when delivery fails.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from picket.domain.model.subscription import PushSubscription


class MailAttachment(BaseModel):
    """A file attached to an outgoing email."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class Mailer(ABC):
    """Sends email."""

    @abstractmethod
    async def send(
        self,
        to: str,
        subject: str,
        body: str,
        attachments: list[MailAttachment] | None = None,
    ) -> None:
        """Send one email.

        Raises:
            UpstreamError: If delivery fails
        """
        pass


class PushSender(ABC):
    """Sends web push notifications."""

    @abstractmethod
    async def send(self, subscription: PushSubscription, payload: dict) -> None:
        """Deliver a payload to one endpoint.

        Raises:
            StaleSubscriptionError: If the endpoint is gone for good
            UpstreamError: For any other delivery failure
        """
        pass
