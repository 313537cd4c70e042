"""Unit tests for the SMTP mailer."""

import smtplib

import pytest

from picket.adapter.error import UpstreamError
from picket.adapter.mail import SmtpMailer
from picket.config import MailSettings
from picket.domain.service import MailAttachment


class FakeSMTP:
    """Stands in for smtplib.SMTP and records the exchange."""

    instances: list["FakeSMTP"] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls: list[str] = []
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def send_message(self, message):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.messages.append(message)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def settings() -> MailSettings:
    return MailSettings(
        host="smtp.test", port=2525, username="bot", password="pw", sender="bot@x.com"
    )


class TestSmtpMailer:
    @pytest.mark.asyncio
    async def test_sends_message_with_attachment(self, fake_smtp, settings):
        mailer = SmtpMailer(settings)

        await mailer.send(
            to="anna@x.com",
            subject="Report",
            body="See attached",
            attachments=[
                MailAttachment(
                    filename="report.csv", content=b"a,b\n", content_type="text/csv"
                )
            ],
        )

        [smtp] = fake_smtp.instances
        assert (smtp.host, smtp.port) == ("smtp.test", 2525)
        assert smtp.calls == ["starttls", "login:bot"]
        [message] = smtp.messages
        assert message["From"] == "bot@x.com"
        assert message["To"] == "anna@x.com"
        [attachment] = list(message.iter_attachments())
        assert attachment.get_filename() == "report.csv"
        assert attachment.get_content_type() == "text/csv"

    @pytest.mark.asyncio
    async def test_no_login_without_credentials(self, fake_smtp):
        mailer = SmtpMailer(MailSettings(host="smtp.test", starttls=False))

        await mailer.send(to="anna@x.com", subject="Hi", body="Hello")

        assert fake_smtp.instances[0].calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPRecipientsRefused({"anna@x.com": (550, b"no such user")}),
            ConnectionRefusedError("connection refused"),
        ],
    )
    async def test_failures_become_upstream_errors(self, fake_smtp, settings, error):
        fake_smtp.fail_with = error
        mailer = SmtpMailer(settings)

        with pytest.raises(UpstreamError):
            await mailer.send(to="anna@x.com", subject="Hi", body="Hello")
