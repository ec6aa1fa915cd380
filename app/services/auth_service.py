from sqlalchemy.exc import IntegrityError

from app.core.config import Settings
from app.core.error_handlers import translate_db_error
from app.core.exceptions import ConflictError, UnauthorizedError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserCreate, UserLogin
from app.utils.audit import audit


class AuthService:
    def __init__(self, user_repo: UserRepository, settings: Settings):
        self.user_repo = user_repo
        self.settings = settings

    def signup(self, user_create: UserCreate) -> User:
        # No existence pre-check: the unique index on users.email decides races
        values = {
            "name": user_create.name,
            "email": user_create.email,
            "password_hash": get_password_hash(user_create.password),
        }
        try:
            user = self.user_repo.create_user(values)
        except IntegrityError as e:
            error = translate_db_error(e)
            if isinstance(error, ConflictError):
                audit("SIGNUP", email=user_create.email, result="duplicate")
                raise ConflictError(
                    "A user with this email already exists",
                    [f"email {user_create.email} is already registered"],
                ) from e
            raise error from e
        audit("SIGNUP", email=user.email, user_id=user.id, result="success")
        return user

    def signin(self, user_login: UserLogin) -> User:
        user = self.user_repo.find_user_by_email(user_login.email)
        if user is None:
            audit("SIGNIN", email=user_login.email, result="unknown_user")
            raise UnauthorizedError("Incorrect email or password", ["user does not exist"])
        if not verify_password(user_login.password, user.password_hash):
            audit("SIGNIN", email=user_login.email, user_id=user.id, result="bad_password")
            raise UnauthorizedError("Incorrect email or password", ["invalid credentials"])
        audit("SIGNIN", email=user.email, user_id=user.id, result="success")
        return user

    def issue_token(self, user_id: int) -> dict:
        return {
            "access_token": create_access_token(self.settings, user_id),
            "token_type": "bearer",
        }
