"""create settings

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""

from collections.abc import Sequence
from datetime import UTC, datetime

import sqlalchemy as sa
from alembic import op

# Revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# (key, value, category, description)
DEFAULT_SETTINGS: list[tuple[str, str, str, str]] = [
    ("max_room_capacity", "30", "room", "Maximum capacity of a standard room"),
    ("default_room_category", "Other", "room", "Default category for new rooms"),
    ("login_token_expiry", "30", "auth", "Login token expiry in minutes"),
    (
        "combined_group_default_expiry",
        "1440",
        "group",
        "Default expiry time for combined groups in minutes (1440 = 24 hours)",
    ),
    ("system_name", "MOTO System", "system", "Name of the system displayed in UI and emails"),
    ("enable_email_notifications", "true", "notification", "Enable email notifications"),
    ("api_rate_limit", "100", "system", "API rate limit per minute"),
    (
        "default_student_visit_duration",
        "60",
        "visit",
        "Default duration for student visits in minutes",
    ),
]


def upgrade() -> None:
    """Apply migration changes."""
    settings_table = op.create_table(
        "settings",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "requires_restart",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "requires_db_reset",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "modified_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_settings_key", "settings", ["key"], unique=True)
    op.create_index("ix_settings_category", "settings", ["category"], unique=False)

    # Fresh table, so no existing keys can collide with the defaults
    seeded_at = datetime.now(UTC)
    op.bulk_insert(
        settings_table,
        [
            {
                "key": key,
                "value": value,
                "category": category,
                "description": description,
                "created_at": seeded_at,
                "modified_at": seeded_at,
            }
            for key, value, category, description in DEFAULT_SETTINGS
        ],
    )


def downgrade() -> None:
    """Reverse migration changes."""
    op.drop_index("ix_settings_category", table_name="settings")
    op.drop_index("ix_settings_key", table_name="settings")
    op.drop_table("settings")
