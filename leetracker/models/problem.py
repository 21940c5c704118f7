"""Problem data model for LeeTracker."""

from datetime import datetime
from typing import List
from pydantic import Field

from leetracker.models.base import CamelModel


class Problem(CamelModel):
    """A solved problem record."""

    id: str = Field(..., description="Unique problem record identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who solved this problem")
    title: str = Field(..., description="Problem title")
    leetcode_id: int = Field(..., description="Problem number on LeetCode")
    difficulty: str = Field(..., description="Difficulty level (Easy / Medium / Hard)")
    language: str = Field(..., description="Language the solution was written in")
    tags: List[str] = Field(default_factory=list, description="Topic tags")
    time_spent_min: int = Field(..., description="Time spent solving, in minutes")
    solved_at: datetime = Field(..., description="When the problem was solved")
    created_at: datetime = Field(..., description="Record creation timestamp")
    updated_at: datetime = Field(..., description="Record last update timestamp")
