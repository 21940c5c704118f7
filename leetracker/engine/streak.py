"""Current solving streak (consecutive days with at least one solved problem).

The streak is derived on read and never persisted. Days are calendar days of
the stored timestamps, which are on the server's naive local clock.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional


def distinct_days(solved_at: Iterable[datetime]) -> List[date]:
    """Distinct calendar days, most recent first."""
    return sorted({moment.date() for moment in solved_at}, reverse=True)


def calculate_streak(solved_at: Iterable[datetime], today: Optional[date] = None) -> int:
    """Count consecutive solving days ending today (or yesterday).

    If nothing was solved today, the walk may start from yesterday instead.
    That allowance applies only at the start of the walk: any later gap ends
    the streak. Days after `today` are ignored.

    Args:
        solved_at: Solve timestamps, in any order
        today: Reference day (defaults to the server's current local day)

    Returns:
        Streak length in days (0 if neither today nor yesterday has a solve)
    """
    if today is None:
        today = date.today()

    days = [day for day in distinct_days(solved_at) if day <= today]
    if not days:
        return 0

    if days[0] == today:
        expected = today
    elif days[0] == today - timedelta(days=1):
        expected = days[0]
    else:
        return 0

    streak = 0
    for day in days:
        if day != expected:
            break
        streak += 1
        expected = expected - timedelta(days=1)
    return streak
