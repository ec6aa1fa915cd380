from fastapi import APIRouter, Depends, status
from typing import List

from app.core.deps import get_budget_service, get_current_user_id, owned_budget
from app.models.budget import Budget
from app.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse
from app.schemas.common import Envelope
from app.services.budget_service import BudgetService

router = APIRouter()


@router.get("", response_model=Envelope[List[BudgetResponse]])
def get_budgets(
    user_id: int = Depends(get_current_user_id),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Get all budgets for the current user"""
    budgets = budget_service.get_budgets(user_id)
    return {"data": budgets, "message": "Budgets fetched successfully"}


@router.get("/{budget_id}", response_model=Envelope[BudgetResponse])
def get_budget(budget: Budget = Depends(owned_budget)):
    """Get a specific budget"""
    return {"data": budget, "message": "Budget fetched successfully"}


@router.post("", response_model=Envelope[BudgetResponse], status_code=status.HTTP_201_CREATED)
def create_budget(
    budget_create: BudgetCreate,
    user_id: int = Depends(get_current_user_id),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Create a new budget owned by the current user"""
    budget = budget_service.create_budget(user_id, budget_create)
    return {"data": budget, "message": "Budget created successfully"}


@router.put("/{budget_id}", response_model=Envelope[BudgetResponse])
def update_budget(
    budget_update: BudgetUpdate,
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Partially update a budget"""
    updated = budget_service.update_budget(budget.user_id, budget.id, budget_update)
    return {"data": updated, "message": "Budget updated successfully"}


@router.delete("/{budget_id}", response_model=Envelope[BudgetResponse])
def delete_budget(
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Delete a budget together with its categories, items, transactions and types"""
    deleted = budget_service.delete_budget(budget.user_id, budget.id)
    return {"data": deleted, "message": "Budget deleted successfully"}
