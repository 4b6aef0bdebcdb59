"""Repository helpers for database operations.

`BaseRepository` wraps the common add/commit/refresh cycle and turns
SQLAlchemy failures into `DatabaseError`; the snapshot repository adds the
per-user queries used by the profile store.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional, List

from core.exceptions import DatabaseError
from core.logger import get_logger
from database.models import Base, NutritionProfileSnapshot

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object.

        Raises:
            DatabaseError: If the commit fails; the session is rolled back.
        """
        try:
            self.session.add(obj)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to persist %s: %s", self.model.__name__, exc)
            raise DatabaseError(f"Could not save {self.model.__name__}", operation="create") from exc
        self.session.refresh(obj)
        return obj


class SnapshotRepository(BaseRepository[NutritionProfileSnapshot]):
    """Queries over a user's assessment snapshots, newest first."""

    def __init__(self, session: Session):
        super().__init__(NutritionProfileSnapshot, session)

    def _for_user(self, user_id: str):
        return (
            self.session.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )

    def latest_for_user(self, user_id: str) -> Optional[NutritionProfileSnapshot]:
        return self._for_user(user_id).first()

    def history_for_user(self, user_id: str, skip: int = 0, limit: int = 50) -> List[NutritionProfileSnapshot]:
        return self._for_user(user_id).offset(skip).limit(limit).all()

    def count_for_user(self, user_id: str) -> int:
        return self.session.query(self.model).filter(self.model.user_id == user_id).count()
