import logging
from dataclasses import dataclass, field

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weekplan.core.errors import CatalogUnavailableError
from weekplan.modules.recipes.models import Ingredient, Recipe, RecipeIngredient

logger = logging.getLogger("plan.catalog")


@dataclass(frozen=True)
class RecipeCandidate:
    Id: int
    Name: str
    Ingredients: tuple[str, ...] = field(default_factory=tuple)

    @property
    def PrimaryIngredient(self) -> str | None:
        return self.Ingredients[0] if self.Ingredients else None

    @property
    def SecondaryIngredient(self) -> str | None:
        return self.Ingredients[1] if len(self.Ingredients) > 1 else None


def RecipeVisibleTo(household_id: int):
    return or_(Recipe.HouseholdId == household_id, Recipe.IsPublic.is_(True))


class RecipeCatalog:
    """Reads the recipes a household may plan with, ingredients in significance order."""

    def __init__(self, db: Session):
        self._db = db

    def ListCandidates(self, household_id: int) -> list[RecipeCandidate]:
        try:
            recipes = (
                self._db.query(Recipe.Id, Recipe.Name)
                .filter(RecipeVisibleTo(household_id))
                .order_by(Recipe.Id.asc())
                .all()
            )
            rows = (
                self._db.query(RecipeIngredient.RecipeId, Ingredient.Name)
                .join(Ingredient, Ingredient.Id == RecipeIngredient.IngredientId)
                .join(Recipe, Recipe.Id == RecipeIngredient.RecipeId)
                .filter(RecipeVisibleTo(household_id))
                .order_by(
                    RecipeIngredient.RecipeId.asc(),
                    RecipeIngredient.IsPrimary.desc(),
                    RecipeIngredient.Id.asc(),
                )
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("recipe catalog query failed household_id=%s", household_id)
            raise CatalogUnavailableError() from exc

        names: dict[int, list[str]] = {}
        for recipe_id, ingredient_name in rows:
            names.setdefault(recipe_id, []).append(ingredient_name)
        return [
            RecipeCandidate(Id=recipe.Id, Name=recipe.Name, Ingredients=tuple(names.get(recipe.Id, [])))
            for recipe in recipes
        ]
