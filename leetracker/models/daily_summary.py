"""Daily summary data model for LeeTracker."""

from datetime import date as date_type, datetime
from pydantic import Field

from leetracker.models.base import CamelModel


class DailySummary(CamelModel):
    """Total minutes a user spent solving problems on one calendar day."""

    id: str
    user_id: str
    date: date_type
    total_minutes: int = Field(..., ge=0)
    created_at: datetime
    updated_at: datetime


class SummaryStats(CamelModel):
    """Totals over a list of daily summaries."""

    total_days: int = 0
    total_minutes: int = 0
    average_minutes: float = 0
