"""Invitation use cases."""

from .issue_invitation import IssueInvitationUseCase
from .redeem_invitation import RedeemInvitationUseCase
from .validate_invitation import ValidateInvitationUseCase

__all__ = [
    "IssueInvitationUseCase",
    "RedeemInvitationUseCase",
    "ValidateInvitationUseCase",
]
