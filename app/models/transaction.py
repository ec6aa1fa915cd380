from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    budget_id = Column(Integer, ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(
        Integer, ForeignKey("budget_category_items.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Survives deletion of its type
    transaction_type_id = Column(
        Integer, ForeignKey("transaction_types.id", ondelete="SET NULL"), nullable=True
    )
    amount = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    budget = relationship("Budget", back_populates="transactions")
    item = relationship("BudgetCategoryItem", back_populates="transactions")
    transaction_type = relationship("TransactionType", back_populates="transactions")
