"""create recipe catalog tables

Revision ID: 0001_recipe_catalog
Revises:
Create Date: 2026-10-12 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_recipe_catalog"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ingredients",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("Name", sa.String(length=64), nullable=False, unique=True),
        sa.Column("Fresh", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("Cost", sa.Float(), nullable=True),
        sa.Column("Stockcode", sa.Integer(), nullable=True),
        sa.Column("IsPublic", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("HouseholdId", sa.Integer(), nullable=True),
    )
    op.create_index("ix_ingredients_household_id", "ingredients", ["HouseholdId"])

    op.create_table(
        "recipes",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("Name", sa.String(length=64), nullable=False),
        sa.Column("IsPublic", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("HouseholdId", sa.Integer(), nullable=True),
    )
    op.create_index("ix_recipes_household_id", "recipes", ["HouseholdId"])

    op.create_table(
        "recipe_ingredients",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("RecipeId", sa.Integer(), sa.ForeignKey("recipes.Id"), nullable=False),
        sa.Column("IngredientId", sa.Integer(), sa.ForeignKey("ingredients.Id"), nullable=False),
        sa.Column("Quantity", sa.String(length=16), nullable=True),
        sa.Column("IsPrimary", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_recipe_ingredients_recipe_id", "recipe_ingredients", ["RecipeId"])
    op.create_index("ix_recipe_ingredients_ingredient_id", "recipe_ingredients", ["IngredientId"])


def downgrade() -> None:
    op.drop_index("ix_recipe_ingredients_ingredient_id", table_name="recipe_ingredients")
    op.drop_index("ix_recipe_ingredients_recipe_id", table_name="recipe_ingredients")
    op.drop_table("recipe_ingredients")
    op.drop_index("ix_recipes_household_id", table_name="recipes")
    op.drop_table("recipes")
    op.drop_index("ix_ingredients_household_id", table_name="ingredients")
    op.drop_table("ingredients")
