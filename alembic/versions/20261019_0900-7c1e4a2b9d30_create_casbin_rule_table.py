"""create_casbin_rule_table

Revision ID: 7c1e4a2b9d30
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1e4a2b9d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create casbin_rule table (rules, assignments, hierarchy edges)."""
    op.create_table(
        "casbin_rule",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "ptype",
            sa.String(length=255),
            nullable=True,
            comment="Policy type: 'p' (rule), 'g' (assignment), 'g2' (hierarchy)",
        ),
        sa.Column(
            "v0",
            sa.String(length=255),
            nullable=True,
            comment="Role for 'p', subject for 'g', child role for 'g2'",
        ),
        sa.Column(
            "v1",
            sa.String(length=255),
            nullable=True,
            comment="Resource for 'p', role for 'g', parent role for 'g2'",
        ),
        sa.Column(
            "v2",
            sa.String(length=255),
            nullable=True,
            comment="Action for 'p', domain for 'g' and 'g2'",
        ),
        sa.Column("v3", sa.String(length=255), nullable=True, comment="Domain for 'p'"),
        sa.Column(
            "v4",
            sa.String(length=255),
            nullable=True,
            comment="Unused (Casbin compatibility)",
        ),
        sa.Column(
            "v5",
            sa.String(length=255),
            nullable=True,
            comment="Unused (Casbin compatibility)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_casbin_rule_ptype", "casbin_rule", ["ptype"])
    op.create_index(
        "uq_casbin_rule_policy",
        "casbin_rule",
        ["ptype", "v0", "v1", "v2", "v3"],
        unique=True,
    )


def downgrade() -> None:
    """Drop casbin_rule table."""
    op.drop_index("uq_casbin_rule_policy", table_name="casbin_rule")
    op.drop_index("idx_casbin_rule_ptype", table_name="casbin_rule")
    op.drop_table("casbin_rule")
