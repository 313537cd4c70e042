"""Mail infrastructure providers."""

from dishka import Scope, provide

from picket.adapter.mail import SmtpMailer
from picket.config import Settings
from picket.domain.service import Mailer
from picket.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider sending through SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: Settings) -> Mailer:
        """Provide SMTP mailer."""
        return SmtpMailer(settings.mail)
