"""Login use case."""

import logfire
from pydantic import BaseModel

from picket.domain.error import NotAuthenticatedError
from picket.domain.service import JWTService, UserService
from picket.domain.value import Role
from picket.domain.value.forms import LoginFields, parse_form


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    role: Role


class LoginUseCase:
    """Use case for exchanging email and password for a session token."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            jwt_service: Session token service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Check the credentials and issue a session token.

        Raises:
            ValidationError: If the email is malformed or the password empty
            NotAuthenticatedError: If the credentials do not match
        """
        fields = parse_form(
            LoginFields, {"email": request.email, "password": request.password}
        )

        with logfire.span("login.execute"):
            user = await self.user_service.authenticate(fields.email, fields.password)
            if user is None:
                # Same message for unknown email and wrong password
                raise NotAuthenticatedError("Invalid credentials")

            logfire.info("User logged in", user_id=str(user.id))
            return LoginResponse(
                token=self.jwt_service.create_token(str(user.id)),
                user_id=str(user.id),
                role=user.role,
            )
