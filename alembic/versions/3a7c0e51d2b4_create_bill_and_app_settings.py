"""create bill and app_settings tables

Revision ID: 3a7c0e51d2b4
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a7c0e51d2b4"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bill",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("Account", sa.Text(), nullable=False),
        sa.Column("Amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("Date", sa.DateTime(), nullable=False),
        sa.Column("Description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bill_Date", "bill", ["Date"], unique=False)

    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(length=120), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_index("ix_bill_Date", table_name="bill")
    op.drop_table("bill")
