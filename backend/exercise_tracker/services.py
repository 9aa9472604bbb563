"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories
and input coercion. Services are intentionally thin: they look up the
owning user, coerce request values, persist via repositories and build
the response views. Store failures are turned into `StorageError` with
the message the API reports for that operation.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import models, repositories
from .errors import NotFoundError, StorageError
from .schemas import ExerciseOut, LogEntry, LogOut, UserOut
from .utils.parsers import format_date, parse_date, parse_int

logger = logging.getLogger("exercise_tracker.services")

# Largest LIMIT a 64-bit SQL integer can carry.
MAX_LIMIT = 2 ** 63 - 1


class UserService:
    """Register and list users."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def create_user(self, username: Optional[str]) -> UserOut:
        """Create a user with `username`; empty and duplicate names are allowed."""
        try:
            user = self.user_repo.create(models.User(username=username))
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("user insert failed: %s", e)
            raise StorageError("Error creating user") from e
        logger.info("user created id=%s", user.id)
        return UserOut(id=user.id, username=user.username)

    def list_users(self) -> List[UserOut]:
        """Return every user as `{username, _id}`."""
        try:
            users = self.user_repo.list_all()
        except SQLAlchemyError as e:
            logger.error("user listing failed: %s", e)
            raise StorageError("Error fetching users") from e
        return [UserOut(id=u.id, username=u.username) for u in users]


class ExerciseService:
    """Record exercises and build per-user logs."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)
        self.exercise_repo = repositories.ExerciseRepository(session)

    def add_exercise(
        self,
        user_id: str,
        description: Optional[str],
        duration: Optional[str],
        date: Optional[str] = None,
    ) -> ExerciseOut:
        """Store an exercise for `user_id` and return the joined view.

        `duration` is read from its leading integer; `date` defaults to the
        current time when omitted or empty. Values that cannot be coerced
        are handed to the store as NULL, which rejects the insert; the
        caller sees a `StorageError` rather than a validation error.
        """
        try:
            user = self.user_repo.get(user_id)
            if not user:
                raise NotFoundError()
            when = parse_date(date) if date else datetime.now()
            exercise = models.Exercise(
                user_id=user.id,
                description=description,
                duration=parse_int(duration),
                date=when,
            )
            exercise = self.exercise_repo.create(exercise)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning("exercise insert failed for user %s: %s", user_id, e)
            raise StorageError("Error saving exercise") from e
        logger.info("exercise %s logged for user %s", exercise.id, user.id)
        return ExerciseOut(
            id=user.id,
            username=user.username,
            description=exercise.description,
            duration=exercise.duration,
            date=format_date(exercise.date),
        )

    def get_log(
        self,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogOut:
        """Return the exercises of `user_id`, optionally filtered and capped.

        Both date bounds are inclusive. A missing, non-numeric or zero
        `limit` returns every matching entry; a negative one is treated as
        its absolute value, and one beyond the database integer range is
        capped to it. `count` is the size of the returned log.
        """
        try:
            user = self.user_repo.get(user_id)
            if not user:
                raise NotFoundError()
            lower = _parse_bound(date_from)
            upper = _parse_bound(date_to)
            max_rows = parse_int(limit)
            exercises = self.exercise_repo.list_for_user(
                user.id,
                date_from=lower,
                date_to=upper,
                limit=min(abs(max_rows), MAX_LIMIT) if max_rows else None,
            )
        except (SQLAlchemyError, ValueError, OverflowError) as e:
            logger.warning("log query failed for user %s: %s", user_id, e)
            raise StorageError("Error fetching exercise log") from e
        log = [
            LogEntry(description=e.description, duration=e.duration, date=format_date(e.date))
            for e in exercises
        ]
        return LogOut(id=user.id, username=user.username, count=len(log), log=log)


def _parse_bound(value: Optional[str]) -> Optional[datetime]:
    """Parse an optional `from`/`to` bound; unreadable text is an error."""
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"invalid date bound: {value!r}")
    return parsed
