"""Domain layer DI providers."""

from dishka import Scope, provide

from picket.config import AuthSettings, Settings
from picket.domain.repository import (
    InvitationRepository,
    SubscriptionRepository,
    UserRepository,
)
from picket.domain.service import (
    AccessService,
    InvitationService,
    JWTService,
    NotificationService,
    PasswordHasher,
    PushSender,
    UserService,
)
from picket.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Stateless helpers that hold only configuration are APP-scoped.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return PasswordHasher(rounds=auth_settings.bcrypt_rounds)

    @provide
    def get_invitation_service(
        self, invitation_repository: InvitationRepository, settings: Settings
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            ttl_days=settings.invitations.ttl_days,
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        subscription_repository: SubscriptionRepository,
        password_hasher: PasswordHasher,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            subscription_repository=subscription_repository,
            password_hasher=password_hasher,
        )

    @provide
    def get_access_service(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> AccessService:
        """Provide authentication and role gates."""
        return AccessService(jwt_service=jwt_service, user_repository=user_repository)

    @provide
    def get_notification_service(
        self,
        subscription_repository: SubscriptionRepository,
        push_sender: PushSender,
    ) -> NotificationService:
        """Provide push fan-out service."""
        return NotificationService(
            subscription_repository=subscription_repository,
            push_sender=push_sender,
        )
