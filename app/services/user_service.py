from typing import Optional

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserUpdate
from app.schemas.webhook import ClerkUserData
from app.utils.audit import audit


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def find_user_by_id(self, user_id: int) -> User:
        user = self.user_repo.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError(
                "The requested user does not exist",
                [f"User with id {user_id} does not exist"],
            )
        return user

    def update_user(self, user_id: int, user_update: UserUpdate) -> User:
        values = user_update.model_dump(exclude_unset=True)
        if "email" in values and values["email"] is None:
            raise BadRequestError("Email cannot be removed", ["email must not be null"])
        user = self.user_repo.update_user(user_id, values)
        if user is None:
            raise NotFoundError(
                "The requested user does not exist",
                [f"User with id {user_id} does not exist"],
            )
        return user

    def delete_user(self, user_id: int) -> User:
        user = self.user_repo.delete_user(user_id)
        if user is None:
            raise NotFoundError(
                "The requested user does not exist",
                [f"User with id {user_id} does not exist"],
            )
        audit("ACCOUNT_DELETED", email=user.email, user_id=user.id)
        return user

    # Identity provider lifecycle

    def create_from_identity_provider(self, data: ClerkUserData) -> User:
        email: Optional[str] = data.primary_email
        if not email:
            raise BadRequestError(
                "User payload has no email address",
                [f"identity provider user {data.id} has no email addresses"],
            )
        user = self.user_repo.create_user(
            {"external_id": data.id, "name": data.full_name, "email": email}
        )
        audit("WEBHOOK_USER_CREATED", email=email, user_id=user.id, external_id=data.id)
        return user

    def delete_from_identity_provider(self, external_id: str) -> User:
        user = self.user_repo.delete_user_by_external_id(external_id)
        if user is None:
            raise NotFoundError(
                "The requested user does not exist",
                [f"User with external id {external_id} does not exist"],
            )
        audit("WEBHOOK_USER_DELETED", user_id=user.id, external_id=external_id)
        return user
