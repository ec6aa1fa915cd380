from fastapi import APIRouter, Depends

from app.api.v1.endpoints import auth, budgets, categories, items, transaction_types, transactions, users
from app.utils.rate_limiter import enforce_rate_limit

api_router = APIRouter(dependencies=[Depends(enforce_rate_limit)])

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/user", tags=["users"])
api_router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
api_router.include_router(
    categories.router, prefix="/budgets/{budget_id}/categories", tags=["budget-categories"]
)
api_router.include_router(
    items.router,
    prefix="/budgets/{budget_id}/categories/{category_id}/items",
    tags=["budget-category-items"],
)
# Types before transactions: /transactions/types must not resolve as /transactions/{transaction_id}
api_router.include_router(
    transaction_types.router, prefix="/budgets/{budget_id}/transactions/types", tags=["transaction-types"]
)
api_router.include_router(
    transactions.router, prefix="/budgets/{budget_id}/transactions", tags=["transactions"]
)
