"""Authentication and authorization gates for routes.

Tokens are read from ``Authorization: Bearer <token>``; the
``x-auth-token`` header is accepted as a fallback for older clients.
"""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Request

from picket.domain.model import User
from picket.domain.service import AccessService, Identity
from picket.domain.value import Role

AUTH_HEADER = "x-auth-token"


def extract_token(request: Request) -> str | None:
    authorization = request.headers.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return None
    return request.headers.get(AUTH_HEADER)


async def _access_service(request: Request) -> AccessService:
    # Request container opened by the dishka middleware
    return await request.state.dishka_container.get(AccessService)


async def get_identity(request: Request) -> Identity:
    """Authentication gate.

    Raises:
        NotAuthenticatedError: If no valid session token is present
    """
    access_service = await _access_service(request)
    identity = access_service.authenticate(extract_token(request))
    request.state.identity = identity
    return identity


def require_roles(*roles: Role) -> Callable[..., Awaitable[User]]:
    """Build an authorization gate admitting only ``roles``.

    The resulting dependency returns the authorized user.
    """
    permitted = frozenset(roles)

    async def _authorize(
        request: Request, identity: Identity = Depends(get_identity)
    ) -> User:
        access_service = await _access_service(request)
        return await access_service.authorize(identity, permitted)

    return _authorize


authenticated = require_roles(Role.MEMBER, Role.PICKETER, Role.ADMIN)
admin_only = require_roles(Role.ADMIN)
