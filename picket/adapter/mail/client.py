"""SMTP mail client."""

import asyncio
import smtplib
from email.message import EmailMessage

import logfire

from picket.adapter.error import UpstreamError
from picket.config import MailSettings
from picket.domain.service.gateway import MailAttachment, Mailer


class SmtpMailer(Mailer):
    """Mailer sending through an SMTP relay.

    ``smtplib`` is blocking, so each send runs in a worker thread.
    """

    def __init__(self, settings: MailSettings) -> None:
        """Initialize SMTP mailer.

        Args:
            settings: Mail settings (host, port, credentials, sender)
        """
        self.settings = settings

    def _build_message(
        self,
        to: str,
        subject: str,
        body: str,
        attachments: list[MailAttachment] | None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        for attachment in attachments or []:
            maintype, _, subtype = attachment.content_type.partition("/")
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.host, self.settings.port, timeout=self.settings.timeout
        ) as server:
            if self.settings.starttls:
                server.starttls()
            if self.settings.username and self.settings.password:
                server.login(self.settings.username, self.settings.password)
            server.send_message(message)

    async def send(
        self,
        to: str,
        subject: str,
        body: str,
        attachments: list[MailAttachment] | None = None,
    ) -> None:
        """Send one email.

        Raises:
            UpstreamError: If the SMTP exchange fails
        """
        with logfire.span("smtp_mailer.send", subject=subject):
            message = self._build_message(to, subject, body, attachments)
            try:
                await asyncio.to_thread(self._send_sync, message)
            except (smtplib.SMTPException, OSError) as e:
                logfire.error(
                    "Email delivery failed",
                    subject=subject,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise UpstreamError(f"Email delivery failed: {e}") from e
            logfire.info(
                "Email sent",
                subject=subject,
                attachments=len(attachments or []),
            )


class MockMailer(Mailer):
    """Mailer for tests.

    Records messages instead of sending them. Set ``fail`` to make every
    send raise ``UpstreamError``.
    """

    def __init__(self) -> None:
        self.outbox: list[EmailMessage] = []
        self.fail = False

    async def send(
        self,
        to: str,
        subject: str,
        body: str,
        attachments: list[MailAttachment] | None = None,
    ) -> None:
        if self.fail:
            raise UpstreamError("Mock mail delivery failure")
        message = EmailMessage()
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        for attachment in attachments or []:
            message.add_attachment(
                attachment.content,
                maintype="application",
                subtype="octet-stream",
                filename=attachment.filename,
            )
        self.outbox.append(message)
