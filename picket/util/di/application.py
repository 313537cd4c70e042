"""Application layer DI providers."""

from dishka import Scope, provide

from picket.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from picket.application.usecase.invitation import (
    IssueInvitationUseCase,
    RedeemInvitationUseCase,
    ValidateInvitationUseCase,
)
from picket.application.usecase.subscription import (
    NotifyUseCase,
    SubscribeUseCase,
    UnsubscribeUseCase,
)
from picket.application.usecase.user import (
    ArchiveUserUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListArchivedUsersUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
    UpdateUserUseCase,
)
from picket.config import Settings
from picket.domain.repository import SubscriptionRepository, UnitOfWork
from picket.domain.service import (
    InvitationService,
    JWTService,
    Mailer,
    NotificationService,
    PasswordHasher,
    UserService,
)
from picket.util.di.base import ProviderBase
from picket.util.tasks import BackgroundDispatcher


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_login_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    # Invitation use cases
    @provide
    def get_issue_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        mailer: Mailer,
        unit_of_work: UnitOfWork,
        dispatcher: BackgroundDispatcher,
        settings: Settings,
    ) -> IssueInvitationUseCase:
        """Provide issue invitation use case."""
        return IssueInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            mailer=mailer,
            unit_of_work=unit_of_work,
            dispatcher=dispatcher,
            settings=settings,
        )

    @provide
    def get_redeem_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
        unit_of_work: UnitOfWork,
    ) -> RedeemInvitationUseCase:
        """Provide redeem invitation use case."""
        return RedeemInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            password_hasher=password_hasher,
            jwt_service=jwt_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_validate_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(invitation_service=invitation_service)

    # User use cases
    @provide
    def get_create_user_use_case(
        self, user_service: UserService, password_hasher: PasswordHasher
    ) -> CreateUserUseCase:
        """Provide create user use case."""
        return CreateUserUseCase(
            user_service=user_service, password_hasher=password_hasher
        )

    @provide
    def get_list_users_use_case(self, user_service: UserService) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_service=user_service)

    @provide
    def get_list_archived_users_use_case(
        self, user_service: UserService
    ) -> ListArchivedUsersUseCase:
        """Provide list archived users use case."""
        return ListArchivedUsersUseCase(user_service=user_service)

    @provide
    def get_get_user_use_case(self, user_service: UserService) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service)

    @provide
    def get_update_user_use_case(self, user_service: UserService) -> UpdateUserUseCase:
        """Provide administrative edit use case."""
        return UpdateUserUseCase(user_service=user_service)

    @provide
    def get_update_profile_use_case(
        self, user_service: UserService
    ) -> UpdateProfileUseCase:
        """Provide profile edit use case."""
        return UpdateProfileUseCase(user_service=user_service)

    @provide
    def get_archive_user_use_case(
        self, user_service: UserService
    ) -> ArchiveUserUseCase:
        """Provide archive user use case."""
        return ArchiveUserUseCase(user_service=user_service)

    @provide
    def get_delete_user_use_case(self, user_service: UserService) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(user_service=user_service)

    # Subscription use cases
    @provide
    def get_subscribe_use_case(
        self, subscription_repository: SubscriptionRepository
    ) -> SubscribeUseCase:
        """Provide subscribe use case."""
        return SubscribeUseCase(subscription_repository=subscription_repository)

    @provide
    def get_unsubscribe_use_case(
        self, subscription_repository: SubscriptionRepository
    ) -> UnsubscribeUseCase:
        """Provide unsubscribe use case."""
        return UnsubscribeUseCase(subscription_repository=subscription_repository)

    @provide
    def get_notify_use_case(
        self, notification_service: NotificationService
    ) -> NotifyUseCase:
        """Provide notify use case."""
        return NotifyUseCase(notification_service=notification_service)
