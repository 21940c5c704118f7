"""User data model for LeeTracker."""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from leetracker.models.base import CamelModel
from leetracker.models.daily_summary import DailySummary
from leetracker.models.problem import Problem


class User(CamelModel):
    """User model for LeeTracker."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    username: str = Field(..., description="Unique display name")
    leetcode_username: Optional[str] = Field(None, description="Verified LeetCode username, if linked")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")


class UserProfile(User):
    """User together with their solved problems and recent daily summaries."""

    problems: List[Problem] = Field(default_factory=list)
    daily_summaries: List[DailySummary] = Field(default_factory=list)
