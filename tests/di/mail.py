"""Mock mail providers for testing."""

from dishka import Scope, provide

from picket.adapter.mail import MockMailer
from picket.domain.service import Mailer
from picket.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider recording outgoing mail."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mailer(self) -> Mailer:
        """Provide mock mailer."""
        return MockMailer()
