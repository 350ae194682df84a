import pytest

from weekplan.core.errors import ValidationError
from weekplan.modules.plan.services import ListWeekRecipes, RecipeNotFoundError, SaveWeek


class _UntouchableDb:
    def __getattr__(self, name):
        raise AssertionError(f"store should not be reached, got db.{name}")


def _Planned(db, *, household_id=1, week=45, year=2024):
    return [row.Name for row in ListWeekRecipes(db, household_id=household_id, week=week, year=year)]


def test_save_week_replaces_previous_plan(db, seed):
    curry = seed.Recipe("Curry", ["rice"])
    salad = seed.Recipe("Salad", ["lettuce"])
    soup = seed.Recipe("Soup", ["leek"])

    SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[curry, salad])
    saved = SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[soup, curry])

    assert saved == [soup, curry]
    assert _Planned(db) == ["Soup", "Curry"]


def test_save_week_drops_repeated_ids(db, seed):
    curry = seed.Recipe("Curry", ["rice"])
    salad = seed.Recipe("Salad", ["lettuce"])
    assert SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[curry, salad, curry]) == [curry, salad]
    assert _Planned(db) == ["Curry", "Salad"]


def test_save_week_accepts_public_recipes(db, seed):
    shared = seed.Recipe("Shared lasagne", ["pasta"], household_id=2, public=True)
    SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[shared])
    assert _Planned(db) == ["Shared lasagne"]


def test_save_week_rejects_other_household_private_recipe(db, seed):
    mine = seed.Recipe("Curry", ["rice"])
    theirs = seed.Recipe("Secret stew", ["beef"], household_id=2)
    SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[mine])

    with pytest.raises(RecipeNotFoundError) as exc_info:
        SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[theirs])

    assert exc_info.value.status_code == 404
    assert exc_info.value.details == {"RecipeIds": [theirs]}
    assert _Planned(db) == ["Curry"]


def test_save_week_keeps_other_weeks_and_households(db, seed):
    curry = seed.Recipe("Curry", ["rice"])
    salad = seed.Recipe("Salad", ["lettuce"], household_id=2)
    seed.Plan([curry], week=46)
    seed.Plan([salad], household_id=2)

    SaveWeek(db, household_id=1, week=45, year=2024, recipe_ids=[])

    assert _Planned(db) == []
    assert _Planned(db, week=46) == ["Curry"]
    assert _Planned(db, household_id=2) == ["Salad"]


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"recipe_ids": None}, "MISSING_FIELDS"),
        ({"recipe_ids": [0]}, "INVALID_RECIPE_ID"),
        ({"recipe_ids": [2**70]}, "INVALID_RECIPE_ID"),
        ({"recipe_ids": "1,2"}, "INVALID_RECIPE_ID"),
        ({"week": 54}, "INVALID_WEEK"),
        ({"year": 2051}, "INVALID_YEAR"),
    ],
)
def test_save_week_validation_runs_before_store(overrides, code):
    arguments = {"household_id": 1, "week": 45, "year": 2024, "recipe_ids": [1]}
    arguments.update(overrides)
    with pytest.raises(ValidationError) as exc_info:
        SaveWeek(_UntouchableDb(), **arguments)
    assert exc_info.value.code == code


def test_save_and_read_week_endpoints(client, seed, auth_headers):
    curry = seed.Recipe("Curry", ["rice"])
    headers = auth_headers()

    response = client.post(
        "/api/plan/save",
        json={"Week": 45, "Year": 2024, "RecipeIds": [curry]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "Week": 45, "Year": 2024, "RecipeIds": [curry]}

    listing = client.get("/api/plan/week?week=45&year=2024", headers=headers)
    assert listing.status_code == 200
    assert listing.json() == {"Week": 45, "Year": 2024, "Recipes": [{"Id": curry, "Name": "Curry"}]}


def test_save_endpoint_hides_other_household_recipes(client, seed, auth_headers):
    theirs = seed.Recipe("Secret stew", ["beef"], household_id=2)
    response = client.post(
        "/api/plan/save",
        json={"Week": 45, "Year": 2024, "RecipeIds": [theirs]},
        headers=auth_headers(household_id=1),
    )
    assert response.status_code == 404
    assert response.json()["code"] == "RECIPE_NOT_FOUND"


def test_save_endpoint_rejects_bad_recipe_id(client, auth_headers):
    response = client.post(
        "/api/plan/save",
        json={"Week": 45, "Year": 2024, "RecipeIds": [0]},
        headers=auth_headers(),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_RECIPE_ID"
