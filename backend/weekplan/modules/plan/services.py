import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weekplan.core.errors import NotFoundError, TranslateStoreError
from weekplan.core.validation import FieldError, RequireFields, ValidatePositiveId, ValidateWeek, ValidateYear
from weekplan.modules.auth.deps import NowUtc
from weekplan.modules.plan.catalog import RecipeVisibleTo
from weekplan.modules.plan.models import PlannedRecipe
from weekplan.modules.recipes.models import Recipe

logger = logging.getLogger("plan.services")


class RecipeNotFoundError(NotFoundError):
    code = "RECIPE_NOT_FOUND"
    error = "Recipe not found or access denied"


def SaveWeek(db: Session, *, household_id: int, week, year, recipe_ids) -> list[int]:
    """Replace the recipes planned for one week; repeated ids are kept once, in order."""
    RequireFields({"Week": week, "Year": year, "RecipeIds": recipe_ids})
    ValidateWeek(week)
    ValidateYear(year)
    if not isinstance(recipe_ids, list):
        raise FieldError("RecipeIds", "RecipeIds must be a list of recipe ids")
    ordered: list[int] = []
    for recipe_id in recipe_ids:
        ValidatePositiveId(recipe_id, "RecipeIds")
        if recipe_id not in ordered:
            ordered.append(recipe_id)

    try:
        visible = set()
        if ordered:
            visible = {
                row.Id
                for row in db.query(Recipe.Id)
                .filter(Recipe.Id.in_(ordered), RecipeVisibleTo(household_id))
                .all()
            }
        missing = [recipe_id for recipe_id in ordered if recipe_id not in visible]
        if missing:
            db.rollback()
            raise RecipeNotFoundError(details={"RecipeIds": missing})

        db.query(PlannedRecipe).filter(
            PlannedRecipe.HouseholdId == household_id,
            PlannedRecipe.Week == week,
            PlannedRecipe.Year == year,
        ).delete(synchronize_session=False)
        now = NowUtc()
        db.add_all(
            [
                PlannedRecipe(
                    HouseholdId=household_id,
                    Week=week,
                    Year=year,
                    RecipeId=recipe_id,
                    CreatedAt=now,
                )
                for recipe_id in ordered
            ]
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("save week failed household_id=%s week=%s year=%s", household_id, week, year)
        raise TranslateStoreError(exc, "Failed to save week recipes") from exc

    logger.info("saved week household_id=%s week=%s year=%s recipes=%s", household_id, week, year, len(ordered))
    return ordered


def ListWeekRecipes(db: Session, *, household_id: int, week, year) -> list:
    ValidateWeek(week)
    ValidateYear(year)
    try:
        return (
            db.query(Recipe.Id, Recipe.Name)
            .join(PlannedRecipe, PlannedRecipe.RecipeId == Recipe.Id)
            .filter(
                PlannedRecipe.HouseholdId == household_id,
                PlannedRecipe.Week == week,
                PlannedRecipe.Year == year,
            )
            .order_by(PlannedRecipe.Id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("list week recipes failed household_id=%s", household_id)
        raise TranslateStoreError(exc, "Failed to fetch week recipes") from exc
