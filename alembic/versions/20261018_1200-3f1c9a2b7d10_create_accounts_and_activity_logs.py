"""create_accounts_and_activity_logs

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 12:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts and activity_logs tables."""
    op.create_table(
        "accounts",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
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
        # Identity
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="Email address (unique, lowercase)",
        ),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column(
            "role",
            sa.String(length=100),
            nullable=False,
            comment="Reference to an externally managed role",
        ),
        sa.Column(
            "credential_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="active | inactive | suspended | deleted",
        ),
        sa.Column("permissions", sa.JSON(), nullable=False),
        # Profile
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("employee_id", sa.String(length=50), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("preferences", sa.JSON(), nullable=False),
        # Verification
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("verification_token", sa.String(length=64), nullable=True),
        sa.Column("verification_expires_at", sa.DateTime(timezone=True), nullable=True),
        # Credential lifecycle
        sa.Column("must_change_credential", sa.Boolean(), nullable=False),
        sa.Column("credential_changed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("credential_reset_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("credential_reset_by", sa.Uuid(), nullable=True),
        # Login tracking
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_address", sa.String(length=45), nullable=True),
        sa.Column(
            "failed_login_count",
            sa.Integer(),
            nullable=False,
            comment="Consecutive failed logins in the current window",
        ),
        sa.Column(
            "locked_until",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Lockout expiry (null when unlocked)",
        ),
        # Audit
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("updated_by", sa.Uuid(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("uq_accounts_employee_id", "accounts", ["employee_id"], unique=True)
    op.create_index("ix_accounts_status_role", "accounts", ["status", "role"])
    op.create_index(
        op.f("ix_accounts_verification_token"), "accounts", ["verification_token"]
    )

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=True),
        sa.Column("actor_id", sa.Uuid(), nullable=True),
        sa.Column("source_address", sa.String(length=45), nullable=True),
        sa.Column("context", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_activity_logs_account_action", "activity_logs", ["account_id", "action"]
    )
    op.create_index("ix_activity_logs_actor", "activity_logs", ["actor_id"])


def downgrade() -> None:
    """Drop activity_logs and accounts tables."""
    op.drop_index("ix_activity_logs_actor", table_name="activity_logs")
    op.drop_index("ix_activity_logs_account_action", table_name="activity_logs")
    op.drop_table("activity_logs")

    op.drop_index(op.f("ix_accounts_verification_token"), table_name="accounts")
    op.drop_index("ix_accounts_status_role", table_name="accounts")
    op.drop_index("uq_accounts_employee_id", table_name="accounts")
    op.drop_index("uq_accounts_email", table_name="accounts")
    op.drop_table("accounts")
