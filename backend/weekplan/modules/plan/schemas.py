from pydantic import BaseModel, StrictInt


class RecipeOut(BaseModel):
    Id: int
    Name: str
    Ingredients: list[str]


class RandomizeResponse(BaseModel):
    Recipes: list[RecipeOut]
    TotalAvailable: int


class PlanSaveRequest(BaseModel):
    Week: StrictInt | None = None
    Year: StrictInt | None = None
    RecipeIds: list[StrictInt] | None = None


class PlanSaveResponse(BaseModel):
    success: bool = True
    Week: int
    Year: int
    RecipeIds: list[int]


class PlannedRecipeOut(BaseModel):
    Id: int
    Name: str


class PlanWeekOut(BaseModel):
    Week: int
    Year: int
    Recipes: list[PlannedRecipeOut]
