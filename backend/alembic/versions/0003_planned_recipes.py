"""create planned recipes table

Revision ID: 0003_planned_recipes
Revises: 0002_shopping_lists
Create Date: 2026-10-19 10:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0003_planned_recipes"
down_revision = "0002_shopping_lists"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "planned_recipes",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("HouseholdId", sa.Integer(), nullable=False),
        sa.Column("Week", sa.SmallInteger(), nullable=False),
        sa.Column("Year", sa.SmallInteger(), nullable=False),
        sa.Column(
            "RecipeId",
            sa.Integer(),
            sa.ForeignKey("recipes.Id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "CreatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    )
    op.create_index("ix_planned_recipes_household_week", "planned_recipes", ["HouseholdId", "Year", "Week"])
    op.create_index("ix_planned_recipes_RecipeId", "planned_recipes", ["RecipeId"])


def downgrade() -> None:
    op.drop_index("ix_planned_recipes_RecipeId", table_name="planned_recipes")
    op.drop_index("ix_planned_recipes_household_week", table_name="planned_recipes")
    op.drop_table("planned_recipes")
