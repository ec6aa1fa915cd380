from fastapi import APIRouter, Depends, status
from typing import List

from app.core.deps import get_budget_service, owned_category, owned_item
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.schemas.budget_category_item import (
    BudgetCategoryItemCreate,
    BudgetCategoryItemUpdate,
    BudgetCategoryItemResponse,
)
from app.schemas.common import Envelope
from app.services.budget_service import BudgetService

# Mounted under /budgets/{budget_id}/categories/{category_id}/items
router = APIRouter()


@router.get("", response_model=Envelope[List[BudgetCategoryItemResponse]])
def get_budget_category_items(
    category: BudgetCategory = Depends(owned_category),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Get all items for a category in a budget"""
    items = budget_service.get_budget_category_items(category.id)
    return {"data": items, "message": "Budget category items fetched successfully"}


@router.get("/{item_id}", response_model=Envelope[BudgetCategoryItemResponse])
def get_budget_category_item(item: BudgetCategoryItem = Depends(owned_item)):
    return {"data": item, "message": "Budget category item fetched successfully"}


@router.post("", response_model=Envelope[BudgetCategoryItemResponse], status_code=status.HTTP_201_CREATED)
def create_budget_category_item(
    item_create: BudgetCategoryItemCreate,
    category: BudgetCategory = Depends(owned_category),
    budget_service: BudgetService = Depends(get_budget_service),
):
    item = budget_service.create_budget_category_item(category.id, item_create)
    return {"data": item, "message": "Budget category item created successfully"}


@router.put("/{item_id}", response_model=Envelope[BudgetCategoryItemResponse])
def update_budget_category_item(
    item_update: BudgetCategoryItemUpdate,
    item: BudgetCategoryItem = Depends(owned_item),
    budget_service: BudgetService = Depends(get_budget_service),
):
    updated = budget_service.update_budget_category_item(item.category_id, item.id, item_update)
    return {"data": updated, "message": "Budget category item updated successfully"}


@router.delete("/{item_id}", response_model=Envelope[BudgetCategoryItemResponse])
def delete_budget_category_item(
    item: BudgetCategoryItem = Depends(owned_item),
    budget_service: BudgetService = Depends(get_budget_service),
):
    deleted = budget_service.delete_budget_category_item(item.category_id, item.id)
    return {"data": deleted, "message": "Budget category item deleted successfully"}


@router.delete("", response_model=Envelope[List[BudgetCategoryItemResponse]])
def delete_all_budget_category_items(
    category: BudgetCategory = Depends(owned_category),
    budget_service: BudgetService = Depends(get_budget_service),
):
    """Delete every item of a category; 404 when the category has none"""
    deleted = budget_service.delete_all_budget_category_items(category.id)
    return {"data": deleted, "message": "Budget category items deleted successfully"}
