from fastapi import APIRouter, Depends, status
from typing import List

from app.core.deps import get_budget_service, owned_budget, owned_category
from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.schemas.budget_category import (
    BudgetCategoryCreate,
    BudgetCategoryUpdate,
    BudgetCategoryResponse,
)
from app.schemas.common import Envelope
from app.services.budget_service import BudgetService

# Mounted under /budgets/{budget_id}/categories
router = APIRouter()


@router.get("", response_model=Envelope[List[BudgetCategoryResponse]])
def get_budget_categories(
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Get all categories for a budget"""
    categories = budget_service.get_budget_categories(budget.id)
    return {"data": categories, "message": "Budget categories fetched successfully"}


@router.get("/{category_id}", response_model=Envelope[BudgetCategoryResponse])
def get_budget_category(category: BudgetCategory = Depends(owned_category)):
    return {"data": category, "message": "Budget category fetched successfully"}


@router.post("", response_model=Envelope[BudgetCategoryResponse], status_code=status.HTTP_201_CREATED)
def create_budget_category(
    category_create: BudgetCategoryCreate,
    budget: Budget = Depends(owned_budget),
    budget_service: BudgetService = Depends(get_budget_service),
):
    category = budget_service.create_budget_category(budget.id, category_create)
    return {"data": category, "message": "Budget category created successfully"}


@router.put("/{category_id}", response_model=Envelope[BudgetCategoryResponse])
def update_budget_category(
    category_update: BudgetCategoryUpdate,
    category: BudgetCategory = Depends(owned_category),
    budget_service: BudgetService = Depends(get_budget_service),
):
    updated = budget_service.update_budget_category(category.budget_id, category.id, category_update)
    return {"data": updated, "message": "Budget category updated successfully"}


@router.delete("/{category_id}", response_model=Envelope[BudgetCategoryResponse])
def delete_budget_category(
    category: BudgetCategory = Depends(owned_category),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Delete a category and, through the cascade, its items"""
    deleted = budget_service.delete_budget_category(category.budget_id, category.id)
    return {"data": deleted, "message": "Budget category deleted successfully"}
