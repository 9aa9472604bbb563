"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (users,
exercises). Repositories return SQLModel objects and perform
commits/refreshes where appropriate; they let SQLAlchemy errors
propagate to the calling service.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import Session, select
from . import models


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def list_all(self) -> List[models.User]:
        """Return every user in insertion order."""
        stmt = select(models.User).order_by(models.User.created_at)
        return self.session.exec(stmt).all()

    def get(self, user_id: str) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)


class ExerciseRepository:
    """Create and query `Exercise` rows for a user."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, exercise: models.Exercise) -> models.Exercise:
        """Persist a new exercise and return the managed instance."""
        self.session.add(exercise)
        self.session.commit()
        self.session.refresh(exercise)
        return exercise

    def list_for_user(
        self,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[models.Exercise]:
        """Return exercises for `user_id` in insertion order.

        `date_from` and `date_to` are inclusive bounds on `date`; `limit`
        caps the number of rows returned after filtering.
        """
        stmt = select(models.Exercise).where(models.Exercise.user_id == user_id)
        if date_from is not None:
            stmt = stmt.where(models.Exercise.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(models.Exercise.date <= date_to)
        stmt = stmt.order_by(models.Exercise.created_at)
        if limit:
            stmt = stmt.limit(limit)
        return self.session.exec(stmt).all()
