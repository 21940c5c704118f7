"""Aggregation engine for LeeTracker."""

from leetracker.engine.analytics import (
    compute_user_analytics,
    compute_platform_analytics,
    compute_user_stats,
    rank_leaderboard,
    rounded_mean,
)
from leetracker.engine.streak import calculate_streak
from leetracker.engine.daily import day_bounds, total_minutes, summary_stats

__all__ = [
    "compute_user_analytics",
    "compute_platform_analytics",
    "compute_user_stats",
    "rank_leaderboard",
    "rounded_mean",
    "calculate_streak",
    "day_bounds",
    "total_minutes",
    "summary_stats",
]
