from fastapi import APIRouter, Depends, status
from typing import List

from app.core.deps import (
    get_budget_service,
    owned_budget,
    owned_transaction_type,
    visible_transaction_type,
)
from app.models.budget import Budget
from app.models.transaction_type import TransactionType
from app.schemas.common import Envelope
from app.schemas.transaction_type import (
    TransactionTypeCreate,
    TransactionTypeUpdate,
    TransactionTypeResponse,
)
from app.services.budget_service import BudgetService

# Mounted under /budgets/{budget_id}/transactions/types, ahead of the
# transactions router so "types" is never parsed as a transaction id
router = APIRouter()


@router.get("", response_model=Envelope[List[TransactionTypeResponse]])
def get_transaction_types(
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Get the shared transaction types plus the ones defined for this budget"""
    transaction_types = budget_service.get_transaction_types(budget.id)
    return {"data": transaction_types, "message": "Transaction types fetched successfully"}


@router.get("/{transaction_type_id}", response_model=Envelope[TransactionTypeResponse])
def get_transaction_type(transaction_type: TransactionType = Depends(visible_transaction_type)):
    return {"data": transaction_type, "message": "Transaction type fetched successfully"}


@router.post("", response_model=Envelope[TransactionTypeResponse], status_code=status.HTTP_201_CREATED)
def create_transaction_type(
    type_create: TransactionTypeCreate,
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    transaction_type = budget_service.create_transaction_type(budget.id, type_create)
    return {"data": transaction_type, "message": "Transaction type created successfully"}


@router.put("/{transaction_type_id}", response_model=Envelope[TransactionTypeResponse])
def update_transaction_type(
    type_update: TransactionTypeUpdate,
    transaction_type: TransactionType = Depends(owned_transaction_type),
    budget_service: BudgetService = Depends(get_budget_service),
):
    updated = budget_service.update_transaction_type(
        transaction_type.budget_id, transaction_type.id, type_update
    )
    return {"data": updated, "message": "Transaction type updated successfully"}


@router.delete("/{transaction_type_id}", response_model=Envelope[TransactionTypeResponse])
def delete_transaction_type(
    transaction_type: TransactionType = Depends(owned_transaction_type),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Delete a type; transactions using it keep existing with no type"""
    deleted = budget_service.delete_transaction_type(transaction_type.budget_id, transaction_type.id)
    return {"data": deleted, "message": "Transaction type deleted successfully"}
