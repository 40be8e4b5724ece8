"""Initial schema: drivers, rides and feedback.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── drivers ───────────────────────────────────────────────────────
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("driver_id", sa.String(32), unique=True, nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("phone", sa.Text, nullable=False),
        sa.Column("auto_number", sa.Text, nullable=False),
        sa.Column("rating", sa.Numeric(3, 2), server_default="0.00"),
        sa.Column(
            "status", sa.String(20), server_default="offline", nullable=False
        ),
        sa.Column("lat", sa.Numeric(10, 8), nullable=True),
        sa.Column("lng", sa.Numeric(11, 8), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_drivers_status", "drivers", ["status"])

    # ── rides ─────────────────────────────────────────────────────────
    op.create_table(
        "rides",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column(
            "driver_id",
            sa.String(36),
            sa.ForeignKey("drivers.id"),
            nullable=True,
        ),
        sa.Column("pickup_location", sa.Text, nullable=False),
        sa.Column("drop_location", sa.Text, nullable=False),
        sa.Column("passengers", sa.Integer, nullable=False),
        sa.Column("ride_type", sa.String(20), nullable=False),
        sa.Column("fare", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status", sa.String(20), server_default="requested", nullable=False
        ),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_rides_status", "rides", ["status"])
    op.create_index("idx_rides_user", "rides", ["user_id"])
    op.create_index("idx_rides_driver", "rides", ["driver_id"])

    # ── feedback ──────────────────────────────────────────────────────
    op.create_table(
        "feedback",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("student_id", sa.Text, nullable=True),
        sa.Column("type", sa.Text, nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("rating", sa.Integer, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("feedback")
    op.drop_table("rides")
    op.drop_table("drivers")
