"""Initial schema creation for Solar Dash alerts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the core tables:
- subscribers: User profiles with alert settings and notification state
- mail: Outbox of queued alert emails for the delivery pipeline
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""
    op.create_table(
        "subscribers",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("email_alerts", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("kp_threshold", sa.Numeric(precision=3, scale=1), nullable=True),
        sa.Column(
            "push_notifications", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "alert_frequency",
            sa.Enum("IMMEDIATELY", "DAILY", "WEEKLY", name="alertfrequency"),
            nullable=False,
            server_default="IMMEDIATELY",
        ),
        sa.Column("locations", sa.JSON(), nullable=False),
        sa.Column("last_notified_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_subscribers_alerts_threshold",
        "subscribers",
        ["email_alerts", "kp_threshold"],
        unique=False,
    )

    op.create_table(
        "mail",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("to", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("html", sa.Text(), nullable=False),
        sa.Column("subscriber_id", sa.String(length=128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_mail_subscriber_id", "mail", ["subscriber_id"], unique=False)


def downgrade() -> None:
    """Drop all tables and enums."""
    op.drop_index("ix_mail_subscriber_id", table_name="mail")
    op.drop_table("mail")
    op.drop_index("ix_subscribers_alerts_threshold", table_name="subscribers")
    op.drop_table("subscribers")

    op.execute("DROP TYPE IF EXISTS alertfrequency")
