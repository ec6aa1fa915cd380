from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class TransactionType(Base):
    """Kind of transaction (income, expense, bill...).

    Types with a NULL ``budget_id`` are shared, predefined types; the rest are
    user defined and scoped to one budget.
    """
    __tablename__ = "transaction_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    budget_id = Column(Integer, ForeignKey("budgets.id", ondelete="CASCADE"), nullable=True, index=True)
    label = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    budget = relationship("Budget", back_populates="transaction_types")
    transactions = relationship("Transaction", back_populates="transaction_type", passive_deletes=True)
