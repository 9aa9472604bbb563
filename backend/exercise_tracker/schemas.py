"""Pydantic response schemas used by the API.

Schemas keep API output shapes stable. Identifiers are exposed on the
wire as `_id`; `populate_by_name` lets services build them with `id`.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class UserOut(BaseModel):
    """Public representation of a user."""
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    id: str = Field(alias="_id")


class ExerciseOut(BaseModel):
    """Joined view returned after logging an exercise.

    `_id` and `username` come from the owning user; the remaining fields
    describe the exercise that was just stored.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: Optional[str] = None
    description: Optional[str] = None
    duration: int
    date: str


class LogEntry(BaseModel):
    """Single exercise line inside a log response."""
    description: Optional[str] = None
    duration: int
    date: str


class LogOut(BaseModel):
    """A user's exercise log; `count` is the length of `log`."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: Optional[str] = None
    count: int
    log: List[LogEntry]


class ErrorOut(BaseModel):
    """Error envelope shared by every failing response."""
    error: str
