"""Access control domain service.

Two gates, applied in order on every protected request:

1. Authentication: the session token must verify. Yields an ``Identity``.
2. Authorization: the identity's current role, read from the credential
   store, must be one of the permitted roles.

Nothing is cached between requests.
"""

from uuid import UUID

import logfire

from picket.domain.error import ForbiddenError, NotAuthenticatedError
from picket.domain.model import User
from picket.domain.repository import UserRepository
from picket.domain.value import Role, UserId
from picket.domain.value.common import ValueObject
from picket.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class Identity(ValueObject):
    """Identity claim decoded from a verified session token."""

    user_id: UserId


class AccessService(Service):
    """Domain service implementing the authentication and role gates."""

    def __init__(self, jwt_service: JWTService, user_repository: UserRepository) -> None:
        """Initialize access service.

        Args:
            jwt_service: Session token service
            user_repository: User repository, for role lookups
        """
        self.jwt_service = jwt_service
        self.user_repository = user_repository

    def authenticate(self, token: str | None) -> Identity:
        """Verify a session token.

        Args:
            token: Bearer token from the request, if any

        Returns:
            The identity carried by the token

        Raises:
            NotAuthenticatedError: If the token is missing, invalid or expired
        """
        if not token:
            raise NotAuthenticatedError("No token, authorization denied")
        try:
            payload = self.jwt_service.verify_token(token)
            return Identity(user_id=UserId(UUID(payload.user_id)))
        except JWTError as e:
            raise NotAuthenticatedError(str(e))
        except ValueError:
            # user_id claim is not a UUID
            raise NotAuthenticatedError("Invalid token")

    async def resolve(self, identity: Identity) -> User:
        """Load the credential behind an identity.

        Fails closed: a missing credential or a store error both reject the
        request.

        Raises:
            NotAuthenticatedError: If the credential cannot be loaded
        """
        try:
            user = await self.user_repository.find_by_id(identity.user_id)
        except Exception as e:
            logfire.error(
                "Credential lookup failed during authorization",
                user_id=str(identity.user_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NotAuthenticatedError()
        if user is None:
            logfire.warn("Token for unknown user", user_id=str(identity.user_id))
            raise NotAuthenticatedError()
        return user

    async def authorize(self, identity: Identity, roles: frozenset[Role]) -> User:
        """Check the identity holds one of ``roles``.

        Args:
            identity: Authenticated identity
            roles: Permitted roles

        Returns:
            The authorized user

        Raises:
            NotAuthenticatedError: If the credential cannot be loaded
            ForbiddenError: If the role is not permitted
        """
        user = await self.resolve(identity)
        if user.role not in roles:
            logfire.warn(
                "Role not permitted",
                user_id=str(user.id),
                role=user.role.value,
                permitted=sorted(r.value for r in roles),
            )
            raise ForbiddenError()
        return user
