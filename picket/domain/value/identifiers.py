"""Strongly typed identifiers for Picket domain entities.

NewType keeps different entity IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InvitationId = NewType("InvitationId", UUID)
SubscriptionId = NewType("SubscriptionId", UUID)
