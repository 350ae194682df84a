"""create shopping lists table

Revision ID: 0002_shopping_lists
Revises: 0001_recipe_catalog
Create Date: 2026-10-12 09:30:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_shopping_lists"
down_revision = "0001_recipe_catalog"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "shopping_lists",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("HouseholdId", sa.Integer(), nullable=False),
        sa.Column("Week", sa.SmallInteger(), nullable=False),
        sa.Column("Year", sa.SmallInteger(), nullable=False),
        sa.Column("Fresh", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("Sort", sa.SmallInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("Name", sa.String(length=64), nullable=False),
        sa.Column("Cost", sa.Float(), nullable=True),
        sa.Column("Stockcode", sa.Integer(), nullable=True),
        sa.Column("Purchased", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "IngredientId",
            sa.Integer(),
            sa.ForeignKey("ingredients.Id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "CreatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "UpdatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    )
    op.create_index("ix_shopping_lists_household_id", "shopping_lists", ["HouseholdId"])
    # Not unique: renumbering passes through duplicate sorts inside a transaction.
    op.create_index(
        "ix_shopping_lists_household_week_bucket_sort",
        "shopping_lists",
        ["HouseholdId", "Year", "Week", "Fresh", "Sort"],
    )


def downgrade() -> None:
    op.drop_index("ix_shopping_lists_household_week_bucket_sort", table_name="shopping_lists")
    op.drop_index("ix_shopping_lists_household_id", table_name="shopping_lists")
    op.drop_table("shopping_lists")
