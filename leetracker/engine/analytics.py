"""Aggregate statistics over solved problems.

All functions here are pure: callers load problems from the repositories and
pass them in. Same inputs always produce the same outputs.
"""

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from leetracker.models.analytics import (
    BreakdownEntry,
    DateRange,
    LeaderboardEntry,
    Overview,
    PlatformAnalytics,
    PlatformOverview,
    UserAnalytics,
    UserRef,
    UserStats,
)
from leetracker.engine.streak import calculate_streak
from leetracker.models.constants import DEFAULT_LEADERBOARD_LIMIT, TOP_TAGS_LIMIT
from leetracker.models.daily_summary import DailySummary
from leetracker.models.problem import Problem
from leetracker.models.user import User


def rounded_mean(total: float, count: int) -> float:
    """`round(total / count, 2)`, or 0 when count is 0."""
    if count <= 0:
        return 0
    return round(total / count, 2)


def compute_overview(problems: List[Problem]) -> Overview:
    total_problems = len(problems)
    total_time = sum(problem.time_spent_min for problem in problems)
    return Overview(
        total_problems=total_problems,
        total_time_spent=total_time,
        average_time_per_problem=rounded_mean(total_time, total_problems),
    )


def _accumulate(stats: Dict[str, BreakdownEntry], key: str, minutes: int) -> None:
    entry = stats.get(key)
    if entry is None:
        entry = stats[key] = BreakdownEntry()
    entry.count += 1
    entry.time_spent += minutes


def difficulty_breakdown(problems: Iterable[Problem]) -> Dict[str, BreakdownEntry]:
    """Difficulty level -> {count, timeSpent}, in first-seen order."""
    stats: Dict[str, BreakdownEntry] = {}
    for problem in problems:
        _accumulate(stats, problem.difficulty, problem.time_spent_min)
    return stats


def language_breakdown(problems: Iterable[Problem]) -> Dict[str, BreakdownEntry]:
    """Language name -> {count, timeSpent}, in first-seen order."""
    stats: Dict[str, BreakdownEntry] = {}
    for problem in problems:
        _accumulate(stats, problem.language, problem.time_spent_min)
    return stats


def top_tags(problems: Iterable[Problem], limit: int = TOP_TAGS_LIMIT) -> Dict[str, BreakdownEntry]:
    """The `limit` most used tags, most used first.

    Ties keep first-seen order (sorted() is stable over insertion order).
    """
    stats: Dict[str, BreakdownEntry] = {}
    for problem in problems:
        for tag in problem.tags:
            _accumulate(stats, tag, problem.time_spent_min)

    ranked = sorted(stats.items(), key=lambda item: item[1].count, reverse=True)
    return dict(ranked[:limit])


def compute_user_analytics(
    problems: List[Problem],
    user: Optional[User] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> UserAnalytics:
    """Overview, breakdowns and top tags for one user's problem set.

    Args:
        problems: The user's problems, already filtered to the date range
        user: Owner of the problems, echoed in the result
        start_date: Lower bound used for filtering (echoed, None if unbounded)
        end_date: Upper bound used for filtering (echoed, None if unbounded)
    """
    return UserAnalytics(
        user=UserRef(id=user.id, username=user.username) if user else None,
        overview=compute_overview(problems),
        difficulty_breakdown=difficulty_breakdown(problems),
        language_breakdown=language_breakdown(problems),
        top_tags=top_tags(problems),
        date_range=DateRange(start_date=start_date, end_date=end_date),
    )


def compute_platform_analytics(total_users: int, total_problems: int, total_time_spent: int) -> PlatformAnalytics:
    return PlatformAnalytics(
        overview=PlatformOverview(
            total_users=total_users,
            total_problems=total_problems,
            total_time_spent=total_time_spent or 0,
            average_problems_per_user=rounded_mean(total_problems, total_users),
        )
    )


def rank_leaderboard(
    user_totals: Iterable[Tuple[User, int, int]],
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> List[LeaderboardEntry]:
    """Rank users by solved-problem count, highest first, and keep the top `limit`.

    Args:
        user_totals: (user, problem count, total minutes) in a stable order;
            ties keep that order
        limit: Maximum number of entries returned
    """
    entries = [
        LeaderboardEntry(
            id=user.id,
            username=user.username,
            problem_count=count,
            total_time_spent=total_time,
        )
        for user, count, total_time in user_totals
    ]
    entries.sort(key=lambda entry: entry.problem_count, reverse=True)
    return entries[:max(limit, 0)]


def compute_user_stats(
    user: User,
    problems: List[Problem],
    recent_summaries: List[DailySummary],
    today: Optional[date] = None,
) -> UserStats:
    """Dashboard statistics: overview, breakdowns, current streak and recent summaries.

    Args:
        user: The user the statistics describe
        problems: All of the user's problems, newest first
        recent_summaries: The user's most recent daily summaries
        today: Reference day for the streak (defaults to the current day)
    """
    return UserStats(
        user=UserRef(id=user.id, username=user.username),
        overview=compute_overview(problems),
        difficulty_breakdown=difficulty_breakdown(problems),
        language_breakdown=language_breakdown(problems),
        streak=calculate_streak([problem.solved_at for problem in problems], today=today),
        last_solved=max((problem.solved_at for problem in problems), default=None),
        recent_summaries=recent_summaries,
    )
