from fastapi import APIRouter, Depends, status
from typing import List, Optional

from app.core.deps import (
    get_budget_service,
    get_current_user_id,
    get_ownership_chain,
    owned_budget,
    owned_transaction,
)
from app.models.budget import Budget
from app.models.transaction import Transaction
from app.schemas.common import Envelope
from app.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionResponse
from app.services.budget_service import BudgetService
from app.services.ownership import OwnershipChain

# Mounted under /budgets/{budget_id}/transactions
router = APIRouter()


def _check_references(
    chain: OwnershipChain,
    user_id: int,
    budget_id: int,
    item_id: Optional[int],
    transaction_type_id: Optional[int],
) -> None:
    """Referenced item and type must hang off the same budget (types may be shared)."""
    if item_id is not None:
        chain.item_in_budget(budget_id, item_id)
    if transaction_type_id is not None:
        chain.transaction_type(user_id, budget_id, transaction_type_id, allow_shared=True)


@router.get("", response_model=Envelope[List[TransactionResponse]])
def get_transactions(
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Get all transactions for a budget"""
    transactions = budget_service.get_transactions(budget.id)
    return {"data": transactions, "message": "Transactions fetched successfully"}


@router.get("/{transaction_id}", response_model=Envelope[TransactionResponse])
def get_transaction(transaction: Transaction = Depends(owned_transaction)):
    return {"data": transaction, "message": "Transaction fetched successfully"}


@router.post("", response_model=Envelope[TransactionResponse], status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_create: TransactionCreate,
    budget: Budget = Depends(owned_budget),
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
    budget_service: BudgetService = Depends(get_budget_service),
):
    _check_references(
        chain, user_id, budget.id, transaction_create.item_id, transaction_create.transaction_type_id
    )
    transaction = budget_service.create_transaction(user_id, budget.id, transaction_create)
    return {"data": transaction, "message": "Transaction created successfully"}


@router.put("/{transaction_id}", response_model=Envelope[TransactionResponse])
def update_transaction(
    transaction_update: TransactionUpdate,
    transaction: Transaction = Depends(owned_transaction),
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
    budget_service: BudgetService = Depends(get_budget_service),
):
    _check_references(
        chain, user_id, transaction.budget_id, transaction_update.item_id, transaction_update.transaction_type_id
    )
    updated = budget_service.update_transaction(transaction.budget_id, transaction.id, transaction_update)
    return {"data": updated, "message": "Transaction updated successfully"}


@router.delete("/{transaction_id}", response_model=Envelope[TransactionResponse])
def delete_transaction(
    transaction: Transaction = Depends(owned_transaction),
    budget_service: BudgetService = Depends(get_budget_service),
):
    deleted = budget_service.delete_transaction(transaction.budget_id, transaction.id)
    return {"data": deleted, "message": "Transaction deleted successfully"}
