from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import verify_token
from app.models.budget import Budget
from app.models.budget_category import BudgetCategory
from app.models.budget_category_item import BudgetCategoryItem
from app.models.transaction import Transaction
from app.models.transaction_type import TransactionType
from app.models.user import User
from app.repositories.budget_repository import BudgetRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import AuthService
from app.services.budget_service import BudgetService
from app.services.ownership import OwnershipChain
from app.services.user_service import UserService

# Missing credentials are reported as 401 by get_current_user_id, not 403
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# Repository -> service chains, built per request on the request's session

def get_budget_repository(db: Session = Depends(get_db)) -> BudgetRepository:
    return BudgetRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_budget_service(repo: BudgetRepository = Depends(get_budget_repository)) -> BudgetService:
    return BudgetService(repo)


def get_ownership_chain(repo: BudgetRepository = Depends(get_budget_repository)) -> OwnershipChain:
    return OwnershipChain(repo)


def get_user_service(repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repo)


def get_auth_service(
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(repo, settings)


# Authentication

async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> int:
    """Resolve the caller from the bearer token without touching the database."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated", ["missing bearer token"])
    user_id = verify_token(settings, credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Invalid authentication credentials", ["token is invalid or expired"])
    return user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    user = repo.find_user_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found", [f"token subject {user_id} no longer exists"])
    return user


# Ownership chain, resolved from path parameters

def owned_budget(
    budget_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> Budget:
    return chain.budget(user_id, budget_id)


def owned_category(
    budget_id: int,
    category_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> BudgetCategory:
    return chain.category(user_id, budget_id, category_id)


def owned_item(
    budget_id: int,
    category_id: int,
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> BudgetCategoryItem:
    return chain.item(user_id, budget_id, category_id, item_id)


def owned_transaction(
    budget_id: int,
    transaction_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> Transaction:
    return chain.transaction(user_id, budget_id, transaction_id)


def visible_transaction_type(
    budget_id: int,
    transaction_type_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> TransactionType:
    """Budget-scoped or shared type; used for reads."""
    return chain.transaction_type(user_id, budget_id, transaction_type_id, allow_shared=True)


def owned_transaction_type(
    budget_id: int,
    transaction_type_id: int,
    user_id: int = Depends(get_current_user_id),
    chain: OwnershipChain = Depends(get_ownership_chain),
) -> TransactionType:
    """Budget-scoped type only; shared types cannot be changed through a budget."""
    return chain.transaction_type(user_id, budget_id, transaction_type_id)
