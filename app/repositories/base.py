from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class BaseRepository:
    """Shared write helpers; every write commits or rolls back on its own."""

    def __init__(self, db: Session):
        self.db = db

    def _add(self, obj: Any) -> Any:
        try:
            self.db.add(obj)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(obj)
        return obj

    @staticmethod
    def _returning_options(stmt):
        # Rows loaded by the ownership check take the values from RETURNING
        return stmt.execution_options(synchronize_session=False, populate_existing=True)

    def _returning_one(self, stmt) -> Optional[Any]:
        """Run an UPDATE/DELETE ... RETURNING and return the affected row, if any."""
        try:
            row = self.db.execute(self._returning_options(stmt)).scalars().first()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return row

    def _returning_all(self, stmt) -> List[Any]:
        try:
            rows = self.db.execute(self._returning_options(stmt)).scalars().all()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return list(rows)
