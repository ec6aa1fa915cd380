from fastapi import APIRouter, Depends, Request, status
from redis import Redis

from app.core.cache import get_cache
from app.core.deps import get_auth_service, get_current_user
from app.core.exceptions import RateLimitError
from app.models.user import User
from app.schemas.common import Envelope
from app.schemas.user import UserCreate, UserLogin, Token
from app.services.auth_service import AuthService
from app.utils.rate_limiter import allow_for_email

router = APIRouter()


@router.post("/signup", response_model=Envelope[Token], status_code=status.HTTP_201_CREATED)
def signup(user_create: UserCreate, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user and return an access token"""
    user = auth_service.signup(user_create)
    return {"data": auth_service.issue_token(user.id), "message": "User signed up successfully"}


@router.post("/signin", response_model=Envelope[Token])
def signin(
    user_login: UserLogin,
    request: Request,
    cache: Redis = Depends(get_cache),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login user and return access token"""
    # Per-email rate limit
    limit = request.app.state.settings.SIGNIN_MAX_ATTEMPTS_PER_MINUTE
    if not allow_for_email(cache, "signin", user_login.email, limit, 60):
        raise RateLimitError("Too many attempts, slow down.", [f"more than {limit} sign-in attempts per minute"])
    user = auth_service.signin(user_login)
    return {"data": auth_service.issue_token(user.id), "message": "User signed in successfully"}


@router.post("/refresh", response_model=Envelope[Token])
def refresh_token(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Refresh access token"""
    return {"data": auth_service.issue_token(current_user.id), "message": "Token refreshed successfully"}
