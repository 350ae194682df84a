from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr

# Request fields are optional at the schema level so that missing fields are
# reported together, with their own codes, by the service validation.


class ShoppingMoveRequest(BaseModel):
    Id: StrictInt | None = None
    Fresh: StrictBool | None = None
    Sort: StrictInt | None = None
    Week: StrictInt | None = None
    Year: StrictInt | None = None


class ShoppingMoveResponse(BaseModel):
    success: bool = True
    Id: int
    Fresh: bool
    Sort: int


class ShoppingAddRequest(BaseModel):
    Week: StrictInt | None = None
    Year: StrictInt | None = None
    Name: StrictStr | None = None
    IngredientId: StrictInt | None = None
    Fresh: StrictBool | None = None


class ShoppingAddResponse(BaseModel):
    success: bool = True
    Id: int


class ShoppingRemoveRequest(BaseModel):
    Id: StrictInt | None = None


class ShoppingPurchaseRequest(BaseModel):
    Id: StrictInt | None = None
    Purchased: StrictBool | None = None


class ShoppingItemUpdate(BaseModel):
    Name: StrictStr | None = None
    Cost: StrictInt | StrictFloat | None = None


class ShoppingItemOut(BaseModel):
    Id: int
    Week: int
    Year: int
    Fresh: bool
    Sort: int
    Name: str
    Cost: float | None = None
    Stockcode: int | None = None
    Purchased: bool
    IngredientId: int | None = None


class ShoppingWeekOut(BaseModel):
    Week: int
    Year: int
    Fresh: list[ShoppingItemOut]
    Pantry: list[ShoppingItemOut]


class KnownIngredientOut(BaseModel):
    Id: int
    Name: str
    Fresh: bool
    Cost: float | None = None
    Stockcode: int | None = None


class SuccessResponse(BaseModel):
    success: bool = True


class ShoppingResetRequest(BaseModel):
    Week: StrictInt | None = None
    Year: StrictInt | None = None


class ShoppingResetResponse(BaseModel):
    success: bool = True
    Fresh: int
    Pantry: int
