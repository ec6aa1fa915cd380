from app.repositories.budget_repository import BudgetRepository
from app.repositories.user_repository import UserRepository

__all__ = ["BudgetRepository", "UserRepository"]
