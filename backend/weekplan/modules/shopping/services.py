import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from weekplan.core.errors import NotFoundError, ValidationError, TranslateStoreError
from weekplan.core.validation import (
    RequireFields,
    ValidateCost,
    ValidateFlag,
    ValidateItemLabel,
    ValidatePositiveId,
    ValidateSort,
    ValidateWeek,
    ValidateYear,
)
from weekplan.modules.auth.deps import NowUtc
from weekplan.modules.plan.models import PlannedRecipe
from weekplan.modules.recipes.models import Ingredient, RecipeIngredient
from weekplan.modules.shopping.models import ShoppingListItem

logger = logging.getLogger("shopping.services")


class ShoppingItemNotFoundError(NotFoundError):
    code = "ITEM_NOT_FOUND"
    error = "Item not found or access denied"


@dataclass
class MoveResult:
    Id: int
    Fresh: bool
    Sort: int


MSSQL_ROW_LOCK = "WITH (UPDLOCK, ROWLOCK)"


def _BucketQuery(db: Session, household_id: int, week: int, year: int, fresh: bool):
    return db.query(ShoppingListItem).filter(
        ShoppingListItem.HouseholdId == household_id,
        ShoppingListItem.Week == week,
        ShoppingListItem.Year == year,
        ShoppingListItem.Fresh == fresh,
    )


def _ForUpdate(query):
    # The mssql compiler drops FOR UPDATE, so SQL Server gets a table hint instead.
    return query.with_for_update().with_hint(ShoppingListItem, MSSQL_ROW_LOCK, "mssql")


def _LockedBucketQuery(
    db: Session,
    household_id: int,
    week: int,
    year: int,
    fresh: bool,
    exclude_id: int | None = None,
):
    query = _BucketQuery(db, household_id, week, year, fresh)
    if exclude_id is not None:
        query = query.filter(ShoppingListItem.Id != exclude_id)
    return _ForUpdate(
        query.with_entities(ShoppingListItem.Id, ShoppingListItem.Sort).order_by(
            ShoppingListItem.Sort.asc(), ShoppingListItem.Id.asc()
        )
    )


def _ReadBucketForUpdate(
    db: Session,
    household_id: int,
    week: int,
    year: int,
    fresh: bool,
    exclude_id: int | None = None,
) -> list:
    return _LockedBucketQuery(db, household_id, week, year, fresh, exclude_id).all()


def _WriteSort(db: Session, household_id: int, item_id: int, sort: int) -> None:
    db.query(ShoppingListItem).filter(
        ShoppingListItem.Id == item_id,
        ShoppingListItem.HouseholdId == household_id,
    ).update({ShoppingListItem.Sort: sort}, synchronize_session=False)


def _CompactBucket(db: Session, household_id: int, week: int, year: int, fresh: bool) -> int:
    """Renumber a bucket to 0..N-1 keeping its current order; returns rows rewritten."""
    written = 0
    rows = _ReadBucketForUpdate(db, household_id, week, year, fresh)
    for index, row in enumerate(rows):
        if row.Sort != index:
            _WriteSort(db, household_id, row.Id, index)
            written += 1
    return written


def _NotFound(week: int | None = None, year: int | None = None) -> ShoppingItemNotFoundError:
    if week is not None and year is not None:
        return ShoppingItemNotFoundError(
            details=f"Shopping list item not found in week {week}/{year} for your household"
        )
    return ShoppingItemNotFoundError(details="Shopping list item not found for your household")


def MoveItem(
    db: Session,
    *,
    household_id: int,
    item_id,
    fresh,
    sort,
    week,
    year,
) -> MoveResult:
    """Move one item to `sort` within the `fresh` or pantry list of its week.

    The moved row is updated first, scoped to the household and week, so a zero
    row count doubles as the access check. Every other row of the destination
    list is then shifted so the list stays 0..N-1, and the opposite list is
    compacted, which covers the source list of a cross-list move.
    """
    RequireFields({"Id": item_id, "Fresh": fresh, "Sort": sort, "Week": week, "Year": year})
    ValidatePositiveId(item_id)
    ValidateSort(sort)
    ValidateWeek(week)
    ValidateYear(year)
    ValidateFlag(fresh, "Fresh")

    try:
        matched = (
            db.query(ShoppingListItem)
            .filter(
                ShoppingListItem.Id == item_id,
                ShoppingListItem.HouseholdId == household_id,
                ShoppingListItem.Week == week,
                ShoppingListItem.Year == year,
            )
            .update(
                {
                    ShoppingListItem.Fresh: fresh,
                    ShoppingListItem.Sort: sort,
                    ShoppingListItem.UpdatedAt: NowUtc(),
                },
                synchronize_session=False,
            )
        )
        if not matched:
            db.rollback()
            logger.info(
                "move rejected, item not in scope item_id=%s household_id=%s week=%s year=%s",
                item_id,
                household_id,
                week,
                year,
            )
            raise _NotFound(week, year)

        others = _ReadBucketForUpdate(db, household_id, week, year, fresh, exclude_id=item_id)
        position = min(sort, len(others))
        shifted = 0
        for index, row in enumerate(others):
            new_sort = index if index < position else index + 1
            if row.Sort != new_sort:
                _WriteSort(db, household_id, row.Id, new_sort)
                shifted += 1
        if position != sort:
            _WriteSort(db, household_id, item_id, position)

        compacted = _CompactBucket(db, household_id, week, year, not fresh)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("move failed item_id=%s household_id=%s", item_id, household_id)
        raise TranslateStoreError(exc) from exc

    logger.debug(
        "moved item_id=%s fresh=%s sort=%s shifted=%s compacted=%s",
        item_id,
        fresh,
        position,
        shifted,
        compacted,
    )
    return MoveResult(Id=item_id, Fresh=fresh, Sort=position)


def AppendItem(
    db: Session,
    *,
    household_id: int,
    week,
    year,
    name,
    ingredient_id=None,
    fresh=None,
) -> ShoppingListItem:
    RequireFields({"Week": week, "Year": year, "Name": name})
    ValidateWeek(week)
    ValidateYear(year)
    label = ValidateItemLabel(name)
    if ingredient_id is not None:
        ValidatePositiveId(ingredient_id, "IngredientId")
    if fresh is not None:
        ValidateFlag(fresh, "Fresh")

    try:
        known = None
        if ingredient_id is not None:
            known = (
                db.query(Ingredient)
                .filter(Ingredient.Id == ingredient_id, Ingredient.IsPublic.is_(True))
                .first()
            )
            if known is None:
                logger.info("ingredient_id=%s not available, adding as free text", ingredient_id)

        if fresh is None:
            fresh = bool(known.Fresh) if known is not None else True

        rows = _ReadBucketForUpdate(db, household_id, week, year, fresh)
        max_sort = max((row.Sort for row in rows), default=-1)
        now = NowUtc()
        record = ShoppingListItem(
            HouseholdId=household_id,
            Week=week,
            Year=year,
            Fresh=fresh,
            Sort=max_sort + 1,
            Name=label,
            Cost=known.Cost if known is not None else None,
            Stockcode=known.Stockcode if known is not None else None,
            IngredientId=known.Id if known is not None else None,
            Purchased=False,
            CreatedAt=now,
            UpdatedAt=now,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("append failed household_id=%s week=%s year=%s", household_id, week, year)
        raise TranslateStoreError(exc, "Failed to add item to shopping list") from exc

    logger.debug("appended item_id=%s fresh=%s sort=%s", record.Id, record.Fresh, record.Sort)
    return record


def ListWeek(db: Session, *, household_id: int, week, year) -> dict[str, list[ShoppingListItem]]:
    ValidateWeek(week)
    ValidateYear(year)
    try:
        rows = (
            db.query(ShoppingListItem)
            .filter(
                ShoppingListItem.HouseholdId == household_id,
                ShoppingListItem.Week == week,
                ShoppingListItem.Year == year,
            )
            .order_by(ShoppingListItem.Sort.asc(), ShoppingListItem.Id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("list week failed household_id=%s", household_id)
        raise TranslateStoreError(exc, "Failed to fetch shopping list") from exc
    return {
        "Fresh": [row for row in rows if row.Fresh],
        "Pantry": [row for row in rows if not row.Fresh],
    }


def RemoveItem(db: Session, *, household_id: int, item_id) -> None:
    """Delete one item and close the gap it leaves in its list."""
    RequireFields({"Id": item_id})
    ValidatePositiveId(item_id)
    try:
        entry = _ForUpdate(
            db.query(ShoppingListItem).filter(
                ShoppingListItem.Id == item_id, ShoppingListItem.HouseholdId == household_id
            )
        ).first()
        if entry is None:
            db.rollback()
            raise _NotFound()
        week, year, fresh = entry.Week, entry.Year, entry.Fresh
        db.delete(entry)
        db.flush()
        _CompactBucket(db, household_id, week, year, fresh)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("remove failed item_id=%s household_id=%s", item_id, household_id)
        raise TranslateStoreError(exc) from exc


def SetPurchased(db: Session, *, household_id: int, item_id, purchased) -> None:
    RequireFields({"Id": item_id, "Purchased": purchased})
    ValidatePositiveId(item_id)
    ValidateFlag(purchased, "Purchased")
    try:
        matched = (
            db.query(ShoppingListItem)
            .filter(ShoppingListItem.Id == item_id, ShoppingListItem.HouseholdId == household_id)
            .update(
                {ShoppingListItem.Purchased: purchased, ShoppingListItem.UpdatedAt: NowUtc()},
                synchronize_session=False,
            )
        )
        if not matched:
            db.rollback()
            raise _NotFound()
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("purchase toggle failed item_id=%s household_id=%s", item_id, household_id)
        raise TranslateStoreError(exc) from exc


def UpdateItem(db: Session, *, household_id: int, item_id, changes: dict) -> ShoppingListItem:
    ValidatePositiveId(item_id)
    values = {}
    if "Name" in changes:
        values[ShoppingListItem.Name] = ValidateItemLabel(changes["Name"])
    if "Cost" in changes:
        values[ShoppingListItem.Cost] = ValidateCost(changes["Cost"])
    if not values:
        raise ValidationError(
            "Missing required fields",
            code="MISSING_FIELDS",
            details={"fields": ["Name", "Cost"]},
        )
    values[ShoppingListItem.UpdatedAt] = NowUtc()

    try:
        matched = (
            db.query(ShoppingListItem)
            .filter(ShoppingListItem.Id == item_id, ShoppingListItem.HouseholdId == household_id)
            .update(values, synchronize_session=False)
        )
        if not matched:
            db.rollback()
            raise _NotFound()
        db.commit()
        entry = db.query(ShoppingListItem).filter(ShoppingListItem.Id == item_id).one()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("update failed item_id=%s household_id=%s", item_id, household_id)
        raise TranslateStoreError(exc) from exc
    return entry


def ListKnownIngredients(db: Session) -> list[Ingredient]:
    try:
        return (
            db.query(Ingredient)
            .filter(Ingredient.IsPublic.is_(True))
            .order_by(Ingredient.Name.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("known ingredient lookup failed")
        raise TranslateStoreError(exc, "Failed to fetch ingredients") from exc


def ResetWeek(db: Session, *, household_id: int, week, year) -> dict[str, int]:
    """Rebuild a week's list from its planned recipes, one row per recipe ingredient.

    The week's existing rows are deleted and the new rows are numbered 0..N-1
    per list, fresh items and pantry items each ordered by ingredient name.
    """
    RequireFields({"Week": week, "Year": year})
    ValidateWeek(week)
    ValidateYear(year)
    try:
        _ForUpdate(
            db.query(ShoppingListItem.Id).filter(
                ShoppingListItem.HouseholdId == household_id,
                ShoppingListItem.Week == week,
                ShoppingListItem.Year == year,
            )
        ).all()
        removed = (
            db.query(ShoppingListItem)
            .filter(
                ShoppingListItem.HouseholdId == household_id,
                ShoppingListItem.Week == week,
                ShoppingListItem.Year == year,
            )
            .delete(synchronize_session=False)
        )
        ingredients = (
            db.query(Ingredient.Id, Ingredient.Name, Ingredient.Fresh, Ingredient.Cost, Ingredient.Stockcode)
            .select_from(PlannedRecipe)
            .join(RecipeIngredient, RecipeIngredient.RecipeId == PlannedRecipe.RecipeId)
            .join(Ingredient, Ingredient.Id == RecipeIngredient.IngredientId)
            .filter(
                PlannedRecipe.HouseholdId == household_id,
                PlannedRecipe.Week == week,
                PlannedRecipe.Year == year,
            )
            .order_by(
                Ingredient.Fresh.desc(),
                Ingredient.Name.asc(),
                PlannedRecipe.Id.asc(),
                RecipeIngredient.Id.asc(),
            )
            .all()
        )
        next_sort = {True: 0, False: 0}
        now = NowUtc()
        for ingredient in ingredients:
            fresh = bool(ingredient.Fresh)
            db.add(
                ShoppingListItem(
                    HouseholdId=household_id,
                    Week=week,
                    Year=year,
                    Fresh=fresh,
                    Sort=next_sort[fresh],
                    Name=ingredient.Name,
                    Cost=ingredient.Cost,
                    Stockcode=ingredient.Stockcode,
                    IngredientId=ingredient.Id,
                    Purchased=False,
                    CreatedAt=now,
                    UpdatedAt=now,
                )
            )
            next_sort[fresh] += 1
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("reset failed household_id=%s week=%s year=%s", household_id, week, year)
        raise TranslateStoreError(exc, "Failed to reset shopping list") from exc

    logger.info(
        "reset week household_id=%s week=%s year=%s removed=%s fresh=%s pantry=%s",
        household_id,
        week,
        year,
        removed,
        next_sort[True],
        next_sort[False],
    )
    return {"Fresh": next_sort[True], "Pantry": next_sort[False]}
