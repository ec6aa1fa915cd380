from fastapi import APIRouter, Depends

from app.core.deps import get_current_user_id, get_user_service
from app.schemas.common import Envelope
from app.schemas.user import UserProfile, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.get("/user-details", response_model=Envelope[UserProfile])
def get_user_details(
    user_id: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    """Get current user's profile"""
    user = user_service.find_user_by_id(user_id)
    return {"data": user, "message": "User fetched successfully"}


@router.put("", response_model=Envelope[UserProfile])
def update_user(
    user_update: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    """Update user profile information"""
    user = user_service.update_user(user_id, user_update)
    return {"data": user, "message": "User updated successfully"}


@router.delete("", response_model=Envelope[UserProfile])
def delete_user(
    user_id: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    """Delete the account and everything it owns"""
    user = user_service.delete_user(user_id)
    return {"data": user, "message": "User deleted successfully"}
