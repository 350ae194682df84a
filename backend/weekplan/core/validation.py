from weekplan.core.errors import ValidationError

WEEK_MIN = 1
WEEK_MAX = 53
YEAR_MIN = 2015
YEAR_MAX = 2050
SORT_MIN = 0
SORT_MAX = 1000
MAX_ITEM_LENGTH = 64
MAX_ID = 2**31 - 1

FIELD_ERRORS = {
    "Id": ("INVALID_ID", "Invalid item id"),
    "Sort": ("INVALID_SORT", "Invalid sort value"),
    "Week": ("INVALID_WEEK", "Invalid week number"),
    "Year": ("INVALID_YEAR", "Invalid year"),
    "Fresh": ("INVALID_BUCKET", "Fresh must be a boolean"),
    "Name": ("INVALID_NAME", "Invalid item name"),
    "IngredientId": ("INVALID_INGREDIENT_ID", "Invalid ingredient id"),
    "Purchased": ("INVALID_PURCHASED", "Purchased status must be a boolean"),
    "Cost": ("INVALID_COST", "Invalid cost"),
    "RecipeIds": ("INVALID_RECIPE_ID", "Invalid recipe id"),
}


def FieldError(field: str, message: str | None = None) -> ValidationError:
    code, error = FIELD_ERRORS.get(field, ("VALIDATION_ERROR", "Invalid request"))
    details = {"field": field}
    if message:
        details["message"] = message
    return ValidationError(error, code=code, field=field, details=details)


def RequireFields(values: dict) -> None:
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise ValidationError(
            "Missing required fields",
            code="MISSING_FIELDS",
            details={"fields": missing},
        )


def _IsInt(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def ValidatePositiveId(value, field: str = "Id") -> int:
    if not _IsInt(value) or not 0 < value <= MAX_ID:
        raise FieldError(field, f"{field} must be a positive integer up to {MAX_ID}")
    return value


def ValidateSort(value) -> int:
    if not _IsInt(value) or not SORT_MIN <= value <= SORT_MAX:
        raise FieldError("Sort", f"Sort must be an integer between {SORT_MIN} and {SORT_MAX}")
    return value


def ValidateWeek(value) -> int:
    if not _IsInt(value) or not WEEK_MIN <= value <= WEEK_MAX:
        raise FieldError("Week", f"Week must be a number between {WEEK_MIN} and {WEEK_MAX}")
    return value


def ValidateYear(value) -> int:
    if not _IsInt(value) or not YEAR_MIN <= value <= YEAR_MAX:
        raise FieldError("Year", f"Year must be between {YEAR_MIN} and {YEAR_MAX}")
    return value


def ValidateFlag(value, field: str) -> bool:
    if not isinstance(value, bool):
        raise FieldError(field, f"{field} must be true or false")
    return value


def NormalizeItemLabel(value: str | None) -> str:
    if value is None:
        return ""
    return " ".join(value.strip().split())


def ValidateItemLabel(value) -> str:
    if not isinstance(value, str):
        raise FieldError("Name", "Name must be text")
    normalized = NormalizeItemLabel(value)
    if not normalized:
        raise FieldError("Name", "Name is required")
    if len(normalized) > MAX_ITEM_LENGTH:
        raise FieldError("Name", f"Name must be at most {MAX_ITEM_LENGTH} characters")
    return normalized


def ValidateCost(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise FieldError("Cost", "Cost must be a non-negative number")
    return float(value)


def FieldFromRequestError(location: tuple | list) -> str | None:
    """Pick the payload field name out of a FastAPI request validation location."""
    for part in reversed(list(location)):
        if isinstance(part, str) and part in FIELD_ERRORS:
            return part
    return None
