"""Request bodies accepted by the API (camelCase, snake_case also accepted)."""

from datetime import date, datetime
from typing import List, Optional
from pydantic import Field, field_validator

from leetracker.models.base import CamelModel


class UserCreateRequest(CamelModel):
    username: str = Field(..., min_length=1, description="Display name")


class ProblemCreateRequest(CamelModel):
    """Request to record a solved problem."""

    title: str = Field(..., min_length=1)
    leetcode_id: int
    user_id: str = Field(..., min_length=1)
    difficulty_level: str = Field(..., min_length=1, description="Easy, Medium or Hard")
    language_name: str = Field(..., min_length=1)
    time_spent_min: int = Field(..., gt=0, description="Minutes spent solving")
    tag_names: List[str] = Field(default_factory=list)
    solved_at: Optional[datetime] = None


class ProblemUpdateRequest(CamelModel):
    """Partial update; omitted fields are left unchanged, `tagNames` replaces all tags."""

    title: Optional[str] = Field(None, min_length=1)
    difficulty_level: Optional[str] = None
    language_name: Optional[str] = None
    tag_names: Optional[List[str]] = None
    time_spent_min: Optional[int] = Field(None, gt=0)
    solved_at: Optional[datetime] = None


class NameRequest(CamelModel):
    """Create or rename a tag or language."""

    name: str = Field(..., min_length=1)


class DifficultyRequest(CamelModel):
    """Create or rename a difficulty."""

    level: str = Field(..., min_length=1)


class AutoCalculateRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    day: date = Field(..., alias="date")

    @field_validator("day", mode="before")
    @classmethod
    def calendar_day(cls, value):
        # Timestamps are accepted and truncated to their calendar day.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class DailySummaryRequest(AutoCalculateRequest):
    total_minutes: int = Field(..., ge=0)


class VerificationRequest(CamelModel):
    """Body for initiate and verify.

    Both fields are optional here so the workflow can report which is missing.
    """

    user_id: Optional[str] = None
    leetcode_username: Optional[str] = None


class RemoveVerificationRequest(CamelModel):
    user_id: Optional[str] = None
