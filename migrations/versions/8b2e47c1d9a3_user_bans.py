"""user_bans

Record why, until when and by whom a user is banned. A NULL
banned_until on a banned user means the ban is permanent.

Revision ID: 8b2e47c1d9a3
Revises: 3f1c2a9d7b40
Create Date: 2026-10-19 16:40:02.551930

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "8b2e47c1d9a3"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column("users", sa.Column("ban_reason", sa.Text(), nullable=True))
    op.add_column(
        "users",
        sa.Column("banned_until", postgresql.TIMESTAMP(timezone=True), nullable=True),
    )
    op.add_column("users", sa.Column("banned_by", sa.String(length=128), nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column("users", "banned_by")
    op.drop_column("users", "banned_until")
    op.drop_column("users", "ban_reason")
