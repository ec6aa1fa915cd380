from typing import Any, Dict, List, Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.sql import func

from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.models.transaction import Transaction
from app.models.transaction_type import TransactionType
from app.repositories.base import BaseRepository


class BudgetRepository(BaseRepository):
    """Data access for a budget and everything that hangs off it.

    Each method issues exactly one filtered statement. Update and delete
    methods use RETURNING and give back ``None`` (or an empty list) when no
    row matched, leaving the "not found" decision to the caller.
    """

    # Budgets

    def get_budgets(self, user_id: int) -> List[Budget]:
        return self.db.query(Budget).filter(Budget.user_id == user_id).order_by(Budget.id).all()

    def get_budget_by_id(self, budget_id: int) -> Optional[Budget]:
        return self.db.query(Budget).filter(Budget.id == budget_id).first()

    def create_budget(self, values: Dict[str, Any]) -> Budget:
        return self._add(Budget(**values))

    def update_budget(self, user_id: int, budget_id: int, values: Dict[str, Any]) -> Optional[Budget]:
        stmt = (
            update(Budget)
            .where(Budget.id == budget_id, Budget.user_id == user_id)
            .values(**values, updated_at=func.now())
            .returning(Budget)
        )
        return self._returning_one(stmt)

    def delete_budget(self, user_id: int, budget_id: int) -> Optional[Budget]:
        stmt = delete(Budget).where(Budget.id == budget_id, Budget.user_id == user_id).returning(Budget)
        return self._returning_one(stmt)

    # Budget categories

    def get_budget_categories(self, budget_id: int) -> List[BudgetCategory]:
        return (
            self.db.query(BudgetCategory)
            .filter(BudgetCategory.budget_id == budget_id)
            .order_by(BudgetCategory.id)
            .all()
        )

    def get_budget_category_by_id(self, category_id: int) -> Optional[BudgetCategory]:
        return self.db.query(BudgetCategory).filter(BudgetCategory.id == category_id).first()

    def create_budget_category(self, values: Dict[str, Any]) -> BudgetCategory:
        return self._add(BudgetCategory(**values))

    def update_budget_category(
        self, budget_id: int, category_id: int, values: Dict[str, Any]
    ) -> Optional[BudgetCategory]:
        stmt = (
            update(BudgetCategory)
            .where(BudgetCategory.id == category_id, BudgetCategory.budget_id == budget_id)
            .values(**values, updated_at=func.now())
            .returning(BudgetCategory)
        )
        return self._returning_one(stmt)

    def delete_budget_category(self, budget_id: int, category_id: int) -> Optional[BudgetCategory]:
        stmt = (
            delete(BudgetCategory)
            .where(BudgetCategory.id == category_id, BudgetCategory.budget_id == budget_id)
            .returning(BudgetCategory)
        )
        return self._returning_one(stmt)

    # Budget category items

    def get_budget_category_items(self, category_id: int) -> List[BudgetCategoryItem]:
        return (
            self.db.query(BudgetCategoryItem)
            .filter(BudgetCategoryItem.category_id == category_id)
            .order_by(BudgetCategoryItem.id)
            .all()
        )

    def get_budget_category_item_by_id(self, item_id: int) -> Optional[BudgetCategoryItem]:
        return self.db.query(BudgetCategoryItem).filter(BudgetCategoryItem.id == item_id).first()

    def create_budget_category_item(self, values: Dict[str, Any]) -> BudgetCategoryItem:
        return self._add(BudgetCategoryItem(**values))

    def update_budget_category_item(
        self, category_id: int, item_id: int, values: Dict[str, Any]
    ) -> Optional[BudgetCategoryItem]:
        stmt = (
            update(BudgetCategoryItem)
            .where(BudgetCategoryItem.id == item_id, BudgetCategoryItem.category_id == category_id)
            .values(**values, updated_at=func.now())
            .returning(BudgetCategoryItem)
        )
        return self._returning_one(stmt)

    def delete_budget_category_item(self, category_id: int, item_id: int) -> Optional[BudgetCategoryItem]:
        stmt = (
            delete(BudgetCategoryItem)
            .where(BudgetCategoryItem.id == item_id, BudgetCategoryItem.category_id == category_id)
            .returning(BudgetCategoryItem)
        )
        return self._returning_one(stmt)

    def delete_all_budget_category_items(self, category_id: int) -> List[BudgetCategoryItem]:
        stmt = (
            delete(BudgetCategoryItem)
            .where(BudgetCategoryItem.category_id == category_id)
            .returning(BudgetCategoryItem)
        )
        return self._returning_all(stmt)

    # Transactions

    def get_transactions(self, budget_id: int) -> List[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.budget_id == budget_id)
            .order_by(Transaction.date, Transaction.id)
            .all()
        )

    def get_transaction_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(Transaction.id == transaction_id).first()

    def create_transaction(self, values: Dict[str, Any]) -> Transaction:
        return self._add(Transaction(**values))

    def update_transaction(
        self, budget_id: int, transaction_id: int, values: Dict[str, Any]
    ) -> Optional[Transaction]:
        stmt = (
            update(Transaction)
            .where(Transaction.id == transaction_id, Transaction.budget_id == budget_id)
            .values(**values, updated_at=func.now())
            .returning(Transaction)
        )
        return self._returning_one(stmt)

    def delete_transaction(self, budget_id: int, transaction_id: int) -> Optional[Transaction]:
        stmt = (
            delete(Transaction)
            .where(Transaction.id == transaction_id, Transaction.budget_id == budget_id)
            .returning(Transaction)
        )
        return self._returning_one(stmt)

    # Transaction types (shared, predefined + budget scoped)

    def get_transaction_types(self, budget_id: int) -> List[TransactionType]:
        return (
            self.db.query(TransactionType)
            .filter(or_(TransactionType.budget_id == budget_id, TransactionType.budget_id.is_(None)))
            .order_by(TransactionType.id)
            .all()
        )

    def get_transaction_type_by_id(self, transaction_type_id: int) -> Optional[TransactionType]:
        return self.db.query(TransactionType).filter(TransactionType.id == transaction_type_id).first()

    def create_transaction_type(self, values: Dict[str, Any]) -> TransactionType:
        return self._add(TransactionType(**values))

    def update_transaction_type(
        self, budget_id: int, transaction_type_id: int, values: Dict[str, Any]
    ) -> Optional[TransactionType]:
        stmt = (
            update(TransactionType)
            .where(TransactionType.id == transaction_type_id, TransactionType.budget_id == budget_id)
            .values(**values, updated_at=func.now())
            .returning(TransactionType)
        )
        return self._returning_one(stmt)

    def delete_transaction_type(self, budget_id: int, transaction_type_id: int) -> Optional[TransactionType]:
        stmt = (
            delete(TransactionType)
            .where(TransactionType.id == transaction_type_id, TransactionType.budget_id == budget_id)
            .returning(TransactionType)
        )
        return self._returning_one(stmt)
