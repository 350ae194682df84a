from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, SmallInteger, String

from weekplan.db import Base


class ShoppingListItem(Base):
    __tablename__ = "shopping_lists"
    __table_args__ = (
        Index(
            "ix_shopping_lists_household_week_bucket_sort",
            "HouseholdId",
            "Year",
            "Week",
            "Fresh",
            "Sort",
        ),
    )

    Id = Column(Integer, primary_key=True, index=True)
    HouseholdId = Column(Integer, nullable=False, index=True)
    Week = Column(SmallInteger, nullable=False)
    Year = Column(SmallInteger, nullable=False)
    Fresh = Column(Boolean, nullable=False, default=True)
    Sort = Column(SmallInteger, nullable=False, default=0)
    Name = Column(String(64), nullable=False)
    Cost = Column(Float)
    Stockcode = Column(Integer)
    Purchased = Column(Boolean, nullable=False, default=False)
    IngredientId = Column(Integer, ForeignKey("ingredients.Id", ondelete="SET NULL"))
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
