import os

os.environ.setdefault("LOG_FILE_PATH", "")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from weekplan.db import Base, GetDb
from weekplan.modules.plan.models import PlannedRecipe
from weekplan.modules.recipes.models import Ingredient, Recipe, RecipeIngredient
from weekplan.modules.shopping.models import ShoppingListItem

TEST_JWT_SECRET = "weekplan-test-secret"


class ShoppingSeeder:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def Items(self, names, *, household_id=1, week=45, year=2024, fresh=True) -> list[int]:
        with self._session_factory() as session:
            records = [
                ShoppingListItem(
                    HouseholdId=household_id,
                    Week=week,
                    Year=year,
                    Fresh=fresh,
                    Sort=index,
                    Name=name,
                    Purchased=False,
                )
                for index, name in enumerate(names)
            ]
            session.add_all(records)
            session.commit()
            return [record.Id for record in records]

    def Ingredient(self, name, *, fresh=True, cost=None, stockcode=None, public=True, household_id=None) -> int:
        with self._session_factory() as session:
            record = Ingredient(
                Name=name,
                Fresh=fresh,
                Cost=cost,
                Stockcode=stockcode,
                IsPublic=public,
                HouseholdId=household_id,
            )
            session.add(record)
            session.commit()
            return record.Id

    def Recipe(self, name, ingredients, *, household_id=1, public=False, primary=None) -> int:
        """Create a recipe; `ingredients` are names in authoring order, `primary` flags one of them."""
        with self._session_factory() as session:
            recipe = Recipe(Name=name, HouseholdId=household_id, IsPublic=public)
            session.add(recipe)
            session.flush()
            for ingredient_name in ingredients:
                ingredient = session.query(Ingredient).filter(Ingredient.Name == ingredient_name).first()
                if ingredient is None:
                    ingredient = Ingredient(Name=ingredient_name, Fresh=True, IsPublic=True)
                    session.add(ingredient)
                    session.flush()
                session.add(
                    RecipeIngredient(
                        RecipeId=recipe.Id,
                        IngredientId=ingredient.Id,
                        IsPrimary=ingredient_name == primary,
                    )
                )
            session.commit()
            return recipe.Id

    def Plan(self, recipe_ids, *, household_id=1, week=45, year=2024) -> None:
        with self._session_factory() as session:
            session.add_all(
                [
                    PlannedRecipe(HouseholdId=household_id, Week=week, Year=year, RecipeId=recipe_id)
                    for recipe_id in recipe_ids
                ]
            )
            session.commit()

    def Bucket(self, *, household_id=1, week=45, year=2024, fresh=True) -> list[tuple[str, int]]:
        with self._session_factory() as session:
            rows = (
                session.query(ShoppingListItem.Name, ShoppingListItem.Sort)
                .filter(
                    ShoppingListItem.HouseholdId == household_id,
                    ShoppingListItem.Week == week,
                    ShoppingListItem.Year == year,
                    ShoppingListItem.Fresh == fresh,
                )
                .order_by(ShoppingListItem.Sort.asc(), ShoppingListItem.Id.asc())
                .all()
            )
            return [(row.Name, row.Sort) for row in rows]

    def Get(self, item_id) -> ShoppingListItem | None:
        with self._session_factory() as session:
            entry = session.get(ShoppingListItem, item_id)
            if entry is not None:
                session.expunge(entry)
            return entry


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed(session_factory):
    return ShoppingSeeder(session_factory)


@pytest.fixture
def auth_headers(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)

    def _build(household_id=1, user_id=7):
        token = jwt.encode(
            {"sub": str(user_id), "household_id": household_id},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        return {"Authorization": f"Bearer {token}"}

    return _build


@pytest.fixture
def client(session_factory):
    from weekplan.main import app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[GetDb] = _get_test_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
