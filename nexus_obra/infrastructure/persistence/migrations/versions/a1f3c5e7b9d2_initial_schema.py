"""initial schema: app_user, client, client_member, obra, obra_responsible

Revision ID: a1f3c5e7b9d2
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1f3c5e7b9d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - create tenant, user and project tables."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("client_id", sa.String(), nullable=True),
        sa.Column("reset_password", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_app_user_username"),
        sa.CheckConstraint(
            "role IN ('masterAdmin', 'Admin', 'user', 'guest')",
            name="app_user_role_check",
        ),
        sa.CheckConstraint(
            "NOT (role = 'masterAdmin' AND client_id IS NOT NULL)",
            name="app_user_master_admin_no_client",
        ),
    )
    op.create_index("ix_app_user_client_id", "app_user", ["client_id"])

    op.create_table(
        "client",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=False),
        sa.Column("client_email", sa.String(), nullable=True),
        sa.Column("client_phone", sa.String(), nullable=True),
        sa.Column("client_logo", sa.String(), nullable=True),
        sa.Column("client_admin_id", sa.String(), nullable=False),
        sa.Column("sub_status", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("client_name", name="uq_client_client_name"),
        sa.UniqueConstraint("client_email", name="uq_client_client_email"),
        sa.UniqueConstraint("client_phone", name="uq_client_client_phone"),
    )
    op.create_foreign_key(
        "fk_client_admin_id_app_user", "client", "app_user", ["client_admin_id"], ["id"]
    )
    op.create_foreign_key(
        "fk_app_user_client_id",
        "app_user",
        "client",
        ["client_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "client_member",
        sa.Column("client_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("client_id", "user_id"),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_client_member_user_id", "client_member", ["user_id"])

    op.create_table(
        "obra",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("obra_name", sa.String(), nullable=False),
        sa.Column("obra_description", sa.String(), nullable=True),
        sa.Column("obra_location", sa.String(), nullable=True),
        sa.Column("obra_status", sa.String(), nullable=False, server_default="planning"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("budget", sa.Float(), nullable=True),
        sa.Column("client_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "obra_status IN ('planning', 'in-progress', 'completed', 'on-hold')",
            name="obra_status_check",
        ),
        sa.CheckConstraint("budget IS NULL OR budget >= 0", name="obra_budget_non_negative"),
    )
    op.create_index("ix_obra_client_id", "obra", ["client_id"])
    op.create_index("ix_obra_obra_status", "obra", ["obra_status"])

    op.create_table(
        "obra_responsible",
        sa.Column("obra_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("obra_id", "user_id"),
        sa.ForeignKeyConstraint(["obra_id"], ["obra.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_table("obra_responsible")
    op.drop_index("ix_obra_obra_status", "obra")
    op.drop_index("ix_obra_client_id", "obra")
    op.drop_table("obra")
    op.drop_index("ix_client_member_user_id", "client_member")
    op.drop_table("client_member")
    op.drop_constraint("fk_app_user_client_id", "app_user", type_="foreignkey")
    op.drop_constraint("fk_client_admin_id_app_user", "client", type_="foreignkey")
    op.drop_table("client")
    op.drop_index("ix_app_user_client_id", "app_user")
    op.drop_table("app_user")
