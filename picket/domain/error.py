"""Domain layer errors."""

from pydantic import BaseModel


class DomainError(Exception):
    """Base domain error."""

    pass


class FieldViolation(BaseModel):
    """A single rejected input field."""

    field: str
    message: str


class ValidationError(DomainError):
    """Client input failed validation.

    Carries every violated field, not only the first one.
    """

    def __init__(self, violations: list[FieldViolation]):
        self.violations = violations
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Invalid fields: {fields}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class InvalidInvitationError(DomainError):
    """Invitation token is unknown, expired or already redeemed."""

    def __init__(self, message: str = "Invitation is not valid"):
        super().__init__(message)


class DuplicateAccountError(DomainError):
    """A credential with this email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists")


class NotAuthenticatedError(DomainError):
    """Request carries no valid session."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Authenticated, but the role does not permit the operation."""

    def __init__(self, message: str = "You don't have permission"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
