# Import all models here for Alembic
from app.models.user import User
from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.models.transaction_type import TransactionType
from app.models.transaction import Transaction

__all__ = [
    "User",
    "Budget",
    "BudgetCategory",
    "BudgetCategoryItem",
    "TransactionType",
    "Transaction",
]
