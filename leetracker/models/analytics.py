"""Analytics result models for LeeTracker."""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import Field

from leetracker.models.base import CamelModel
from leetracker.models.daily_summary import DailySummary


class BreakdownEntry(CamelModel):
    """Count and total time for one difficulty, language or tag."""

    count: int = 0
    time_spent: int = 0


class Overview(CamelModel):
    total_problems: int = 0
    total_time_spent: int = 0
    average_time_per_problem: float = 0


class DateRange(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class UserRef(CamelModel):
    id: str
    username: str


class UserAnalytics(CamelModel):
    """Aggregate statistics over a user's solved problems."""

    user: Optional[UserRef] = None
    overview: Overview = Field(default_factory=Overview)
    difficulty_breakdown: Dict[str, BreakdownEntry] = Field(default_factory=dict)
    language_breakdown: Dict[str, BreakdownEntry] = Field(default_factory=dict)
    top_tags: Dict[str, BreakdownEntry] = Field(default_factory=dict)
    date_range: DateRange = Field(default_factory=DateRange)


class PlatformOverview(CamelModel):
    total_users: int = 0
    total_problems: int = 0
    total_time_spent: int = 0
    average_problems_per_user: float = 0


class PlatformAnalytics(CamelModel):
    overview: PlatformOverview = Field(default_factory=PlatformOverview)


class LeaderboardEntry(CamelModel):
    id: str
    username: str
    problem_count: int = 0
    total_time_spent: int = 0


class UserStats(CamelModel):
    """Dashboard statistics for a single user."""

    user: UserRef
    overview: Overview
    difficulty_breakdown: Dict[str, BreakdownEntry] = Field(default_factory=dict)
    language_breakdown: Dict[str, BreakdownEntry] = Field(default_factory=dict)
    streak: int = 0
    last_solved: Optional[datetime] = None
    recent_summaries: List[DailySummary] = Field(default_factory=list)
