import logging
from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from weekplan.db import GetDb
from weekplan.modules.auth.deps import HouseholdContext, RequireHousehold
from weekplan.modules.shopping.models import ShoppingListItem
from weekplan.modules.shopping.schemas import (
    KnownIngredientOut,
    ShoppingAddRequest,
    ShoppingAddResponse,
    ShoppingItemOut,
    ShoppingItemUpdate,
    ShoppingMoveRequest,
    ShoppingMoveResponse,
    ShoppingPurchaseRequest,
    ShoppingRemoveRequest,
    ShoppingResetRequest,
    ShoppingResetResponse,
    ShoppingWeekOut,
    SuccessResponse,
)
from weekplan.modules.shopping.services import (
    AppendItem,
    ListKnownIngredients,
    ListWeek,
    MoveItem,
    RemoveItem,
    ResetWeek,
    SetPurchased,
    UpdateItem,
)

router = APIRouter()
logger = logging.getLogger("shopping.items")


def _BuildShoppingOut(entry: ShoppingListItem) -> ShoppingItemOut:
    return ShoppingItemOut(
        Id=entry.Id,
        Week=entry.Week,
        Year=entry.Year,
        Fresh=entry.Fresh,
        Sort=entry.Sort,
        Name=entry.Name,
        Cost=entry.Cost,
        Stockcode=entry.Stockcode,
        Purchased=entry.Purchased,
        IngredientId=entry.IngredientId,
    )


@router.get("/week", response_model=ShoppingWeekOut)
def GetShoppingWeek(
    week: int | None = None,
    year: int | None = None,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> ShoppingWeekOut:
    today = date.today().isocalendar()
    week = week if week is not None else today.week
    year = year if year is not None else today.year
    buckets = ListWeek(db, household_id=household.HouseholdId, week=week, year=year)
    return ShoppingWeekOut(
        Week=week,
        Year=year,
        Fresh=[_BuildShoppingOut(entry) for entry in buckets["Fresh"]],
        Pantry=[_BuildShoppingOut(entry) for entry in buckets["Pantry"]],
    )


@router.get("/ingredients", response_model=list[KnownIngredientOut])
def GetKnownIngredients(
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> list[KnownIngredientOut]:
    return [
        KnownIngredientOut(
            Id=entry.Id,
            Name=entry.Name,
            Fresh=entry.Fresh,
            Cost=entry.Cost,
            Stockcode=entry.Stockcode,
        )
        for entry in ListKnownIngredients(db)
    ]


@router.put("/move", response_model=ShoppingMoveResponse)
def MoveShoppingItem(
    payload: ShoppingMoveRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> ShoppingMoveResponse:
    result = MoveItem(
        db,
        household_id=household.HouseholdId,
        item_id=payload.Id,
        fresh=payload.Fresh,
        sort=payload.Sort,
        week=payload.Week,
        year=payload.Year,
    )
    return ShoppingMoveResponse(Id=result.Id, Fresh=result.Fresh, Sort=result.Sort)


@router.put("/add", response_model=ShoppingAddResponse, status_code=status.HTTP_201_CREATED)
def AddShoppingItem(
    payload: ShoppingAddRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> ShoppingAddResponse:
    entry = AppendItem(
        db,
        household_id=household.HouseholdId,
        week=payload.Week,
        year=payload.Year,
        name=payload.Name,
        ingredient_id=payload.IngredientId,
        fresh=payload.Fresh,
    )
    return ShoppingAddResponse(Id=entry.Id)


@router.delete("/remove", response_model=SuccessResponse)
def RemoveShoppingItem(
    payload: ShoppingRemoveRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> SuccessResponse:
    RemoveItem(db, household_id=household.HouseholdId, item_id=payload.Id)
    return SuccessResponse()


@router.post("/purchase", response_model=SuccessResponse)
def PurchaseShoppingItem(
    payload: ShoppingPurchaseRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> SuccessResponse:
    SetPurchased(
        db,
        household_id=household.HouseholdId,
        item_id=payload.Id,
        purchased=payload.Purchased,
    )
    return SuccessResponse()


@router.patch("/items/{item_id}", response_model=ShoppingItemOut)
def UpdateShoppingItem(
    item_id: int,
    payload: ShoppingItemUpdate,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> ShoppingItemOut:
    entry = UpdateItem(
        db,
        household_id=household.HouseholdId,
        item_id=item_id,
        changes=payload.model_dump(exclude_unset=True),
    )
    return _BuildShoppingOut(entry)


@router.post("/reset", response_model=ShoppingResetResponse)
def ResetShoppingWeek(
    payload: ShoppingResetRequest,
    db: Session = Depends(GetDb),
    household: HouseholdContext = Depends(RequireHousehold),
) -> ShoppingResetResponse:
    counts = ResetWeek(db, household_id=household.HouseholdId, week=payload.Week, year=payload.Year)
    return ShoppingResetResponse(Fresh=counts["Fresh"], Pantry=counts["Pantry"])
