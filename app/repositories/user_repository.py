from typing import Any, Dict, Optional

from sqlalchemy import delete, update
from sqlalchemy.sql import func

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, values: Dict[str, Any]) -> User:
        return self._add(User(**values))

    def update_user(self, user_id: int, values: Dict[str, Any]) -> Optional[User]:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**values, updated_at=func.now())
            .returning(User)
        )
        return self._returning_one(stmt)

    def delete_user(self, user_id: int) -> Optional[User]:
        return self._returning_one(delete(User).where(User.id == user_id).returning(User))

    def delete_user_by_external_id(self, external_id: str) -> Optional[User]:
        return self._returning_one(
            delete(User).where(User.external_id == external_id).returning(User)
        )
