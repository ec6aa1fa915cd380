from typing import List

from app.core.exceptions import NotFoundError
from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.models.transaction import Transaction
from app.models.transaction_type import TransactionType
from app.repositories.budget_repository import BudgetRepository
from app.schemas.budget import BudgetCreate, BudgetUpdate
from app.schemas.budget_category import BudgetCategoryCreate, BudgetCategoryUpdate
from app.schemas.budget_category_item import BudgetCategoryItemCreate, BudgetCategoryItemUpdate
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.schemas.transaction_type import TransactionTypeCreate, TransactionTypeUpdate


def _not_found(resource: str, resource_id: int) -> NotFoundError:
    return NotFoundError(
        f"{resource} not found",
        [f"{resource.lower()} with id {resource_id} could not be found"],
    )


class BudgetService:
    """Budget operations on top of ``BudgetRepository``.

    Callers are expected to have validated the ownership chain already; the
    service still turns an update or delete that matched no row (for
    example a concurrent delete) into ``NotFoundError``.
    """

    def __init__(self, budget_repo: BudgetRepository):
        self.budget_repo = budget_repo

    # Budgets

    def get_budgets(self, user_id: int) -> List[Budget]:
        return self.budget_repo.get_budgets(user_id)

    def create_budget(self, user_id: int, budget_create: BudgetCreate) -> Budget:
        return self.budget_repo.create_budget({**budget_create.model_dump(), "user_id": user_id})

    def update_budget(self, user_id: int, budget_id: int, budget_update: BudgetUpdate) -> Budget:
        budget = self.budget_repo.update_budget(
            user_id, budget_id, budget_update.model_dump(exclude_unset=True)
        )
        if budget is None:
            raise _not_found("Budget", budget_id)
        return budget

    def delete_budget(self, user_id: int, budget_id: int) -> Budget:
        budget = self.budget_repo.delete_budget(user_id, budget_id)
        if budget is None:
            raise _not_found("Budget", budget_id)
        return budget

    # Budget categories

    def get_budget_categories(self, budget_id: int) -> List[BudgetCategory]:
        return self.budget_repo.get_budget_categories(budget_id)

    def create_budget_category(self, budget_id: int, category_create: BudgetCategoryCreate) -> BudgetCategory:
        return self.budget_repo.create_budget_category({**category_create.model_dump(), "budget_id": budget_id})

    def update_budget_category(
        self, budget_id: int, category_id: int, category_update: BudgetCategoryUpdate
    ) -> BudgetCategory:
        category = self.budget_repo.update_budget_category(
            budget_id, category_id, category_update.model_dump(exclude_unset=True)
        )
        if category is None:
            raise _not_found("Budget category", category_id)
        return category

    def delete_budget_category(self, budget_id: int, category_id: int) -> BudgetCategory:
        category = self.budget_repo.delete_budget_category(budget_id, category_id)
        if category is None:
            raise _not_found("Budget category", category_id)
        return category

    # Budget category items

    def get_budget_category_items(self, category_id: int) -> List[BudgetCategoryItem]:
        return self.budget_repo.get_budget_category_items(category_id)

    def create_budget_category_item(
        self, category_id: int, item_create: BudgetCategoryItemCreate
    ) -> BudgetCategoryItem:
        return self.budget_repo.create_budget_category_item({**item_create.model_dump(), "category_id": category_id})

    def update_budget_category_item(
        self, category_id: int, item_id: int, item_update: BudgetCategoryItemUpdate
    ) -> BudgetCategoryItem:
        item = self.budget_repo.update_budget_category_item(
            category_id, item_id, item_update.model_dump(exclude_unset=True)
        )
        if item is None:
            raise _not_found("Budget category item", item_id)
        return item

    def delete_budget_category_item(self, category_id: int, item_id: int) -> BudgetCategoryItem:
        item = self.budget_repo.delete_budget_category_item(category_id, item_id)
        if item is None:
            raise _not_found("Budget category item", item_id)
        return item

    def delete_all_budget_category_items(self, category_id: int) -> List[BudgetCategoryItem]:
        items = self.budget_repo.delete_all_budget_category_items(category_id)
        if not items:
            raise NotFoundError(
                "Budget category items not found",
                [f"budget category with id {category_id} has no items to delete"],
            )
        return items

    # Transactions

    def get_transactions(self, budget_id: int) -> List[Transaction]:
        return self.budget_repo.get_transactions(budget_id)

    def create_transaction(
        self, user_id: int, budget_id: int, transaction_create: TransactionCreate
    ) -> Transaction:
        return self.budget_repo.create_transaction(
            {**transaction_create.model_dump(), "user_id": user_id, "budget_id": budget_id}
        )

    def update_transaction(
        self, budget_id: int, transaction_id: int, transaction_update: TransactionUpdate
    ) -> Transaction:
        transaction = self.budget_repo.update_transaction(
            budget_id, transaction_id, transaction_update.model_dump(exclude_unset=True)
        )
        if transaction is None:
            raise _not_found("Transaction", transaction_id)
        return transaction

    def delete_transaction(self, budget_id: int, transaction_id: int) -> Transaction:
        transaction = self.budget_repo.delete_transaction(budget_id, transaction_id)
        if transaction is None:
            raise _not_found("Transaction", transaction_id)
        return transaction

    # Transaction types

    def get_transaction_types(self, budget_id: int) -> List[TransactionType]:
        return self.budget_repo.get_transaction_types(budget_id)

    def create_transaction_type(self, budget_id: int, type_create: TransactionTypeCreate) -> TransactionType:
        return self.budget_repo.create_transaction_type({**type_create.model_dump(), "budget_id": budget_id})

    def update_transaction_type(
        self, budget_id: int, transaction_type_id: int, type_update: TransactionTypeUpdate
    ) -> TransactionType:
        transaction_type = self.budget_repo.update_transaction_type(
            budget_id, transaction_type_id, type_update.model_dump(exclude_unset=True)
        )
        if transaction_type is None:
            raise _not_found("Transaction type", transaction_type_id)
        return transaction_type

    def delete_transaction_type(self, budget_id: int, transaction_type_id: int) -> TransactionType:
        transaction_type = self.budget_repo.delete_transaction_type(budget_id, transaction_type_id)
        if transaction_type is None:
            raise _not_found("Transaction type", transaction_type_id)
        return transaction_type
