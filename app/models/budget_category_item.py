from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class BudgetCategoryItem(Base):
    __tablename__ = "budget_category_items"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_budget_category_items_amount_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(
        Integer, ForeignKey("budget_categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("BudgetCategory", back_populates="items")
    transactions = relationship("Transaction", back_populates="item", passive_deletes=True)
