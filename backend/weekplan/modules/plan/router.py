import logging
import random
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from weekplan.core.config import Settings
from weekplan.core.errors import CatalogUnavailableError
from weekplan.db import GetDb
from weekplan.modules.auth.deps import HouseholdContext, RequireHousehold
from weekplan.modules.plan.catalog import RecipeCatalog
from weekplan.modules.plan.schemas import (
    PlannedRecipeOut,
    PlanSaveRequest,
    PlanSaveResponse,
    PlanWeekOut,
    RandomizeResponse,
    RecipeOut,
)
from weekplan.modules.plan.selector import ParseCount, SelectRecipes
from weekplan.modules.plan.services import ListWeekRecipes, SaveWeek

router = APIRouter(prefix="/api/plan", tags=["plan"])
logger = logging.getLogger("plan.randomize")


def GetRecipeCatalog(db: Session = Depends(GetDb)) -> RecipeCatalog:
    return RecipeCatalog(db)


def GetRandomSource() -> random.Random:
    return random.Random()


@router.get("/randomize", response_model=RandomizeResponse)
def RandomizeRecipes(
    count: list[str] | None = Query(default=None),
    catalog: RecipeCatalog = Depends(GetRecipeCatalog),
    rng: random.Random = Depends(GetRandomSource),
    household: HouseholdContext = Depends(RequireHousehold),
) -> RandomizeResponse:
    # Repeated ?count= values: the first one wins.
    requested = ParseCount(count[0] if count else None, Settings.RandomizeDefaultCount)
    try:
        candidates = catalog.ListCandidates(household.HouseholdId)
    except CatalogUnavailableError:
        raise
    except Exception as exc:
        logger.exception("recipe catalog failed household_id=%s", household.HouseholdId)
        raise CatalogUnavailableError() from exc
    if candidates is None:
        logger.error("recipe catalog returned no result household_id=%s", household.HouseholdId)
        raise CatalogUnavailableError("Failed to fetch recipes from database")

    selected = SelectRecipes(candidates, requested, rng)
    logger.debug(
        "randomized household_id=%s requested=%s selected=%s available=%s",
        household.HouseholdId,
        requested,
        len(selected),
        len(candidates),
    )
    return RandomizeResponse(
        Recipes=[
            RecipeOut(Id=recipe.Id, Name=recipe.Name, Ingredients=list(recipe.Ingredients))
            for recipe in selected
        ],
        TotalAvailable=len(candidates),
    )


@router.post("/save", response_model=PlanSaveResponse)
def SavePlanWeek(
    payload: PlanSaveRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> PlanSaveResponse:
    saved = SaveWeek(
        db,
        household_id=household.HouseholdId,
        week=payload.Week,
        year=payload.Year,
        recipe_ids=payload.RecipeIds,
    )
    return PlanSaveResponse(Week=payload.Week, Year=payload.Year, RecipeIds=saved)


@router.get("/week", response_model=PlanWeekOut)
def GetPlanWeek(
    week: int | None = None,
    year: int | None = None,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> PlanWeekOut:
    today = date.today().isocalendar()
    week = week if week is not None else today.week
    year = year if year is not None else today.year
    rows = ListWeekRecipes(db, household_id=household.HouseholdId, week=week, year=year)
    return PlanWeekOut(
        Week=week,
        Year=year,
        Recipes=[PlannedRecipeOut(Id=row.Id, Name=row.Name) for row in rows],
    )
