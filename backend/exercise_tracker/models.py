"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Exercises reference their owner only through `user_id`; there is no
foreign key or relationship object between the two tables.

Timestamps are naive: `Exercise.date` is server-local wall time and
`created_at` is UTC. Both columns are declared explicitly as plain
`DateTime` so naive values are stored as given.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `username`: caller-supplied name, neither unique nor validated
    - `created_at`: insertion timestamp, used for stable listing order
    """
    id: str = Field(default_factory=new_id, primary_key=True)
    username: Optional[str] = None
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(), nullable=False),
    )


class Exercise(SQLModel, table=True):
    """A single exercise entry owned by a `User`.

    `duration` and `date` are required columns: a value that could not be
    coerced reaches the database as NULL and the insert is rejected.
    """
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(nullable=False)
    description: Optional[str] = None
    duration: int
    date: datetime = Field(sa_column=Column(DateTime(), nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(), nullable=False),
    )
