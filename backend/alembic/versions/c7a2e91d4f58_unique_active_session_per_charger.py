"""unique_active_session_per_charger

Revision ID: c7a2e91d4f58
Revises: 8e4f0a6b5c13
Create Date: 2026-10-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "c7a2e91d4f58"
down_revision: Union[str, Sequence[str], None] = "8e4f0a6b5c13"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Cancel duplicate active sessions, then add a partial unique index on charger_id where active."""
    # Keep the newest active session per charger; older duplicates become cancelled.
    op.execute(
        sa.text(
            "UPDATE charging_session SET status = 'cancelled' "
            "WHERE status = 'active' AND session_id NOT IN ("
            "  SELECT s.session_id FROM charging_session s "
            "  WHERE s.status = 'active' AND s.start_time = ("
            "    SELECT MAX(s2.start_time) FROM charging_session s2 "
            "    WHERE s2.charger_id = s.charger_id AND s2.status = 'active'"
            "  )"
            ")"
        )
    )
    op.create_index(
        "uq_charging_session_active_charger",
        "charging_session",
        ["charger_id"],
        unique=True,
        sqlite_where=sa.text("status = 'active'"),
        postgresql_where=sa.text("status = 'active'"),
    )


def downgrade() -> None:
    """Drop the partial unique index."""
    op.drop_index("uq_charging_session_active_charger", table_name="charging_session")
