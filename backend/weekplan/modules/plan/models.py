from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, SmallInteger

from weekplan.db import Base


class PlannedRecipe(Base):
    __tablename__ = "planned_recipes"
    __table_args__ = (
        Index("ix_planned_recipes_household_week", "HouseholdId", "Year", "Week"),
    )

    Id = Column(Integer, primary_key=True, index=True)
    HouseholdId = Column(Integer, nullable=False)
    Week = Column(SmallInteger, nullable=False)
    Year = Column(SmallInteger, nullable=False)
    RecipeId = Column(Integer, ForeignKey("recipes.Id", ondelete="CASCADE"), nullable=False, index=True)
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
