"""Domain services."""

from .access_service import AccessService, Identity
from .base import Service
from .gateway import MailAttachment, Mailer, PushSender
from .invitation_service import InvitationService
from .jwt_service import JWTService
from .notification_service import FanOutResult, NotificationService
from .password_service import PasswordHasher
from .user_service import UserService

__all__ = [
    "AccessService",
    "FanOutResult",
    "Identity",
    "InvitationService",
    "JWTService",
    "MailAttachment",
    "Mailer",
    "NotificationService",
    "PasswordHasher",
    "PushSender",
    "Service",
    "UserService",
]
