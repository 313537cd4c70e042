"""Validated input forms for account operations.

Forms are parsed with :func:`parse_form`, which reports every invalid field
at once as a domain :class:`ValidationError`.
"""

from typing import Any, TypeVar

import pydantic
from pydantic import Field, field_validator

from picket.domain.error import FieldViolation, ValidationError
from picket.domain.value.common import ValueObject
from picket.domain.value.types import Email, Role

MIN_PASSWORD_LENGTH = 6

MAX_NAME_LENGTH = 255

PASSWORD_MESSAGE = (
    f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
)


class PersonNames(ValueObject):
    """Name, surname and patronymic, all required."""

    name: str
    surname: str
    patronymic: str

    @field_validator("name", "surname", "patronymic")
    @classmethod
    def validate_name(cls, v: str, info: pydantic.ValidationInfo) -> str:
        v = v.strip()
        label = info.field_name.capitalize()
        if not v:
            raise ValueError(f"{label} is required")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"{label} must be at most {MAX_NAME_LENGTH} characters")
        return v


def _check_password(v: str | None) -> str | None:
    if v is not None and len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError(PASSWORD_MESSAGE)
    return v


class RegistrationFields(PersonNames):
    """Fields submitted when redeeming an invitation.

    There is deliberately no role field: the role comes from the invitation.
    """

    email: Email
    password: str = Field(repr=False)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class AccountFields(PersonNames):
    """Fields an administrator sets when creating or editing a credential."""

    email: Email
    role: Role
    password: str | None = Field(default=None, repr=False)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return _check_password(v)


class NewAccountFields(AccountFields):
    """Account fields for creation, where a password is mandatory."""

    password: str = Field(repr=False)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class ProfileFields(PersonNames):
    """Fields a user may change on their own profile."""

    password: str | None = Field(default=None, repr=False)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return _check_password(v)


class InvitationFields(ValueObject):
    """Fields an administrator submits when issuing an invitation."""

    recipient: Email
    role: Role


class LoginFields(ValueObject):
    """Credentials submitted at login."""

    email: Email
    password: str = Field(min_length=1, repr=False)


FormT = TypeVar("FormT", bound=ValueObject)


def parse_form(form: type[FormT], data: dict[str, Any]) -> FormT:
    """Validate raw input against a form.

    Args:
        form: Form class to validate against
        data: Raw field values

    Returns:
        The validated form

    Raises:
        ValidationError: Listing every violated field
    """
    try:
        return form.model_validate(data)
    except pydantic.ValidationError as e:
        violations = []
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            message = error["msg"].removeprefix("Value error, ")
            if error["type"] == "missing":
                message = f"{field.capitalize()} is required"
            violations.append(FieldViolation(field=field, message=message))
        raise ValidationError(violations) from None
