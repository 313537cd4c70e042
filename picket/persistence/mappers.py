"""Mappers between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through the SQLAlchemy ORM.
"""

from typing import Any, Dict
from uuid import UUID

from picket.domain.model import ArchivedUser, Invitation, PushSubscription, User
from picket.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PushKeys,
    Role,
    SubscriptionId,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        surname=row["surname"],
        patronymic=row["patronymic"],
        email=Email(row["email"]),
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a dict of column values."""
    data = user.model_dump(mode="python")
    data["role"] = user.role.value
    return data


def row_to_archived_user(row: Dict[str, Any]) -> ArchivedUser:
    """Convert database row to ArchivedUser domain model."""
    user = row_to_user(row)
    return ArchivedUser(**user.model_dump(), archived_at=row["archived_at"])


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    issued_by = _uuid(row.get("issued_by"))
    consumed_by = _uuid(row.get("consumed_by"))
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        token=InvitationToken(row["token"]),
        role=Role(row["role"]),
        recipient=Email(row["recipient"]),
        issued_by=UserId(issued_by) if issued_by else None,
        status=InvitationStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        consumed_at=row.get("consumed_at"),
        consumed_by=UserId(consumed_by) if consumed_by else None,
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to a dict of column values."""
    data = invitation.model_dump(mode="python")
    data["role"] = invitation.role.value
    data["status"] = invitation.status.value
    return data


def row_to_subscription(row: Dict[str, Any]) -> PushSubscription:
    """Convert database row to PushSubscription domain model."""
    return PushSubscription(
        id=SubscriptionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        endpoint=row["endpoint"],
        expiration_time=row.get("expiration_time"),
        keys=PushKeys(p256dh=row["p256dh"], auth=row["auth"]),
        created_at=row["created_at"],
    )


def subscription_to_dict(subscription: PushSubscription) -> Dict[str, Any]:
    """Flatten a PushSubscription into column values."""
    return {
        "id": subscription.id,
        "user_id": subscription.user_id,
        "endpoint": subscription.endpoint,
        "expiration_time": subscription.expiration_time,
        "p256dh": subscription.keys.p256dh,
        "auth": subscription.keys.auth,
        "created_at": subscription.created_at,
    }
