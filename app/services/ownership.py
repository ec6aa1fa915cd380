"""
Ownership-chain validation for nested budget resources.

A request such as ``PUT /budgets/1/categories/2/items/3`` is only allowed when
budget 1 belongs to the caller, category 2 belongs to budget 1 and item 3
belongs to category 2. Every link is fetched by id and compared with the id
of the link before it; a missing row and a row hanging off a different parent
both raise ``NotFoundError`` so that resources of other users are
indistinguishable from resources that do not exist.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from app.core.exceptions import NotFoundError
from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.models.transaction import Transaction
from app.models.transaction_type import TransactionType
from app.repositories.budget_repository import BudgetRepository


@dataclass(frozen=True)
class ChainLink:
    resource: str
    resource_id: int
    fetch: Callable[[int], Optional[Any]]
    parent_attr: str
    # Rows whose parent is NULL are shared and pass the parent check
    allow_shared: bool = False


class OwnershipChain:

    def __init__(self, budget_repo: BudgetRepository):
        self.budget_repo = budget_repo

    @staticmethod
    def verify(links: Sequence[ChainLink], root_id: int) -> List[Any]:
        """Walk ``links`` from root to leaf and return the fetched rows in order."""
        rows: List[Any] = []
        expected_parent = root_id
        for link in links:
            row = link.fetch(link.resource_id)
            if row is None:
                raise NotFoundError(
                    f"{link.resource} not found",
                    [f"{link.resource.lower()} with id {link.resource_id} could not be found"],
                )
            parent_id = getattr(row, link.parent_attr)
            shared = link.allow_shared and parent_id is None
            if not shared and parent_id != expected_parent:
                raise NotFoundError(
                    f"{link.resource} not found",
                    [f"{link.resource.lower()} with id {link.resource_id} could not be found"],
                )
            rows.append(row)
            expected_parent = row.id
        return rows

    def _budget_link(self, budget_id: int) -> ChainLink:
        return ChainLink("Budget", budget_id, self.budget_repo.get_budget_by_id, "user_id")

    def _category_link(self, category_id: int) -> ChainLink:
        return ChainLink(
            "Budget category", category_id, self.budget_repo.get_budget_category_by_id, "budget_id"
        )

    def budget(self, user_id: int, budget_id: int) -> Budget:
        (budget,) = self.verify([self._budget_link(budget_id)], user_id)
        return budget

    def category(self, user_id: int, budget_id: int, category_id: int) -> BudgetCategory:
        _, category = self.verify([self._budget_link(budget_id), self._category_link(category_id)], user_id)
        return category

    def item(self, user_id: int, budget_id: int, category_id: int, item_id: int) -> BudgetCategoryItem:
        *_, item = self.verify(
            [
                self._budget_link(budget_id),
                self._category_link(category_id),
                ChainLink(
                    "Budget category item",
                    item_id,
                    self.budget_repo.get_budget_category_item_by_id,
                    "category_id",
                ),
            ],
            user_id,
        )
        return item

    def transaction(self, user_id: int, budget_id: int, transaction_id: int) -> Transaction:
        _, transaction = self.verify(
            [
                self._budget_link(budget_id),
                ChainLink("Transaction", transaction_id, self.budget_repo.get_transaction_by_id, "budget_id"),
            ],
            user_id,
        )
        return transaction

    def transaction_type(
        self, user_id: int, budget_id: int, transaction_type_id: int, allow_shared: bool = False
    ) -> TransactionType:
        _, transaction_type = self.verify(
            [
                self._budget_link(budget_id),
                ChainLink(
                    "Transaction type",
                    transaction_type_id,
                    self.budget_repo.get_transaction_type_by_id,
                    "budget_id",
                    allow_shared=allow_shared,
                ),
            ],
            user_id,
        )
        return transaction_type

    def item_in_budget(self, budget_id: int, item_id: int) -> BudgetCategoryItem:
        """Check that an item referenced by a transaction lives under ``budget_id``."""
        item = self.budget_repo.get_budget_category_item_by_id(item_id)
        category = self.budget_repo.get_budget_category_by_id(item.category_id) if item else None
        if item is None or category is None or category.budget_id != budget_id:
            raise NotFoundError(
                "Budget category item not found",
                [f"budget category item with id {item_id} could not be found in budget {budget_id}"],
            )
        return item
