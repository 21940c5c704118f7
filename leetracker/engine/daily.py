"""Daily time totals computed from solved problems."""

from datetime import date, datetime, time
from typing import Iterable, List, Tuple

from leetracker.engine.analytics import rounded_mean
from leetracker.models.daily_summary import DailySummary, SummaryStats
from leetracker.models.problem import Problem


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """[start-of-day, end-of-day] for a calendar day on the server's naive clock."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def total_minutes(problems: Iterable[Problem]) -> int:
    return sum(problem.time_spent_min for problem in problems)


def summary_stats(summaries: List[DailySummary]) -> SummaryStats:
    total = sum(summary.total_minutes for summary in summaries)
    return SummaryStats(
        total_days=len(summaries),
        total_minutes=total,
        average_minutes=rounded_mean(total, len(summaries)),
    )
