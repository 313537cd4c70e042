"""unlink invitation audit columns

issued_by and consumed_by keep the id of the issuing and redeeming user
after that user is archived or deleted. The id then resolves against
archived_users, or nowhere.

Revision ID: 9b2d4e6f8a13
Revises: 3f1c9a2e7b40
Create Date: 2026-10-17 16:30:00.000000

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "9b2d4e6f8a13"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2e7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.drop_constraint("invitations_issued_by_fkey", "invitations", type_="foreignkey")
    op.drop_constraint(
        "invitations_consumed_by_fkey", "invitations", type_="foreignkey"
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Rows pointing at users that no longer exist would violate the constraint
    op.execute(
        "UPDATE invitations SET issued_by = NULL "
        "WHERE issued_by NOT IN (SELECT id FROM users)"
    )
    op.execute(
        "UPDATE invitations SET consumed_by = NULL "
        "WHERE consumed_by NOT IN (SELECT id FROM users)"
    )
    op.create_foreign_key(
        "invitations_issued_by_fkey",
        "invitations",
        "users",
        ["issued_by"],
        ["id"],
        ondelete="SET NULL",
    )
    op.create_foreign_key(
        "invitations_consumed_by_fkey",
        "invitations",
        "users",
        ["consumed_by"],
        ["id"],
        ondelete="SET NULL",
    )
