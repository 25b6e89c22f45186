"""create_charging_tables

Revision ID: 8e4f0a6b5c13
Revises: 3b1d9c2e7a40
Create Date: 2026-09-28 11:40:02.517920

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e4f0a6b5c13'
down_revision: Union[str, Sequence[str], None] = '3b1d9c2e7a40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create event, session, command and system log tables."""
    op.create_table(
        "charging_event",
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("charger_id", sa.String(length=255), nullable=False),
        sa.Column("station_name", sa.String(length=255), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("session_id", sa.String(length=36), nullable=True),
        sa.PrimaryKeyConstraint("event_id"),
    )
    op.create_index(
        "ix_charging_event_charger_id_timestamp", "charging_event", ["charger_id", "timestamp"]
    )
    op.create_table(
        "charging_session",
        sa.Column("session_id", sa.String(length=36), nullable=False),
        sa.Column("charger_id", sa.String(length=255), nullable=False),
        sa.Column("station_name", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("total_energy", sa.Float(), nullable=True),
        sa.Column("total_cost", sa.Float(), nullable=True),
        sa.Column("cost_per_unit", sa.Float(), nullable=True),
        sa.Column("cost_per_minute", sa.Float(), nullable=True),
        sa.Column("payment_method", sa.String(length=64), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("session_id"),
    )
    op.create_index(
        "ix_charging_session_charger_id_start_time", "charging_session", ["charger_id", "start_time"]
    )
    op.create_table(
        "command",
        sa.Column("command_id", sa.String(length=36), nullable=False),
        sa.Column("charger_id", sa.String(length=255), nullable=False),
        sa.Column("station_name", sa.String(length=255), nullable=False),
        sa.Column("command", sa.String(length=16), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("executed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("response", sa.JSON(), nullable=True),
        sa.Column("executed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("command_id"),
    )
    op.create_index(
        "ix_command_charger_id_executed_timestamp", "command", ["charger_id", "executed", "timestamp"]
    )
    op.create_table(
        "system_log",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("level", sa.String(length=16), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("source", sa.String(length=64), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_system_log_level_timestamp", "system_log", ["level", "timestamp"])


def downgrade() -> None:
    """Drop event, session, command and system log tables."""
    op.drop_index("ix_system_log_level_timestamp", table_name="system_log")
    op.drop_table("system_log", if_exists=True)
    op.drop_index("ix_command_charger_id_executed_timestamp", table_name="command")
    op.drop_table("command", if_exists=True)
    op.drop_index("ix_charging_session_charger_id_start_time", table_name="charging_session")
    op.drop_table("charging_session", if_exists=True)
    op.drop_index("ix_charging_event_charger_id_timestamp", table_name="charging_event")
    op.drop_table("charging_event", if_exists=True)
