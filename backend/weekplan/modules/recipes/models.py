from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from weekplan.db import Base


class Ingredient(Base):
    __tablename__ = "ingredients"

    Id = Column(Integer, primary_key=True, index=True)
    Name = Column(String(64), nullable=False, unique=True)
    Fresh = Column(Boolean, nullable=False, default=True)
    Cost = Column(Float)
    Stockcode = Column(Integer)
    IsPublic = Column(Boolean, nullable=False, default=True)
    HouseholdId = Column(Integer, index=True)


class Recipe(Base):
    __tablename__ = "recipes"

    Id = Column(Integer, primary_key=True, index=True)
    Name = Column(String(64), nullable=False)
    IsPublic = Column(Boolean, nullable=False, default=False)
    HouseholdId = Column(Integer, index=True)

    Ingredients = relationship("RecipeIngredient", back_populates="Recipe")


class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"

    Id = Column(Integer, primary_key=True, index=True)
    RecipeId = Column(Integer, ForeignKey("recipes.Id"), nullable=False, index=True)
    IngredientId = Column(Integer, ForeignKey("ingredients.Id"), nullable=False, index=True)
    Quantity = Column(String(16))
    IsPrimary = Column(Boolean, nullable=False, default=False)

    Recipe = relationship("Recipe", back_populates="Ingredients")
    Ingredient = relationship("Ingredient")
