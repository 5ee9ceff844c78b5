"""Add users and resources with claim fields

Revision ID: 5d2a7c1e9f40
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5d2a7c1e9f40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Release a deleted user's claims before ON DELETE SET NULL clears claimed_by
RELEASE_CLAIMS_SQL = (
    "UPDATE resources SET claimed_by = NULL, claim_status = 'unclaimed', "
    "claimed_at = NULL, notes = NULL WHERE claimed_by = OLD.id;"
)
RELEASE_CLAIMS_SQLITE = (
    "CREATE TRIGGER release_claims_on_user_delete BEFORE DELETE ON users "
    f"FOR EACH ROW BEGIN {RELEASE_CLAIMS_SQL} END"
)
RELEASE_CLAIMS_PG_FUNCTION = (
    "CREATE OR REPLACE FUNCTION release_claims_on_user_delete() RETURNS trigger AS $$ "
    f"BEGIN {RELEASE_CLAIMS_SQL} RETURN OLD; END; $$ LANGUAGE plpgsql"
)
RELEASE_CLAIMS_PG_TRIGGER = (
    "CREATE TRIGGER release_claims_on_user_delete BEFORE DELETE ON users "
    "FOR EACH ROW EXECUTE FUNCTION release_claims_on_user_delete()"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("github_username", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column(
            "last_seen", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_github_username", "users", ["github_username"], unique=True)

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("repository_url", sa.String(length=512), nullable=True),
        sa.Column("claimed_by", sa.Integer(), nullable=True),
        sa.Column(
            "claim_status", sa.String(length=20), server_default="unclaimed", nullable=False
        ),
        sa.Column("claimed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(["claimed_by"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "(claimed_by IS NULL) = (claim_status = 'unclaimed')",
            name="ck_resources_claim_consistent",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_resources_claimed_by", "resources", ["claimed_by"])
    op.create_index("ix_resources_claim_status", "resources", ["claim_status"])

    if op.get_bind().dialect.name == "postgresql":
        op.execute(RELEASE_CLAIMS_PG_FUNCTION)
        op.execute(RELEASE_CLAIMS_PG_TRIGGER)
    else:
        op.execute(RELEASE_CLAIMS_SQLITE)


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS release_claims_on_user_delete ON users")
        op.execute("DROP FUNCTION IF EXISTS release_claims_on_user_delete()")
    else:
        op.execute("DROP TRIGGER IF EXISTS release_claims_on_user_delete")
    op.drop_index("ix_resources_claim_status", table_name="resources")
    op.drop_index("ix_resources_claimed_by", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_users_github_username", table_name="users")
    op.drop_table("users")
