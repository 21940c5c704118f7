"""Daily summary routes."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leetracker.api.request_models import AutoCalculateRequest, DailySummaryRequest
from leetracker.api.responses import api_response
from leetracker.database.daily_summary_repository import DailySummaryRepository
from leetracker.database.database import get_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.user_repository import UserRepository
from leetracker.engine.daily import day_bounds, summary_stats, total_minutes
from leetracker.errors import NotFoundError
from leetracker.models.constants import RECENT_SUMMARIES_LIMIT

router = APIRouter(prefix="/daily-summaries", tags=["Daily Summaries"])


def _require_user(db: Session, user_id: str) -> None:
    if not UserRepository(db).exists(user_id):
        raise NotFoundError("User not found")


@router.post("")
def upsert_daily_summary(request: DailySummaryRequest, db: Session = Depends(get_db)):
    _require_user(db, request.user_id)
    summary, created = DailySummaryRepository(db).upsert(request.user_id, request.day, request.total_minutes)
    if created:
        return api_response(summary, "Daily summary created successfully", status_code=201)
    return api_response(summary, "Daily summary updated successfully")


@router.post("/auto-calculate")
def auto_calculate_daily_summary(request: AutoCalculateRequest, db: Session = Depends(get_db)):
    """Recompute a day's total from the problems solved on it.

    A day with nothing solved is reported as not found and leaves no row behind.
    """
    _require_user(db, request.user_id)
    start, end = day_bounds(request.day)
    problems = ProblemRepository(db).get_all_for_user(request.user_id, start=start, end=end)
    minutes = total_minutes(problems)
    if minutes == 0:
        raise NotFoundError("No problems found for this date")

    summary, _ = DailySummaryRepository(db).upsert(request.user_id, request.day, minutes)
    return api_response(
        {
            "summary": summary,
            "problemsCount": len(problems),
            "problemsOnDate": problems,
        },
        "Daily summary calculated successfully",
    )


@router.get("/user/{user_id}")
def list_daily_summaries(
    user_id: str,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    limit: int = Query(RECENT_SUMMARIES_LIMIT, ge=1),
    db: Session = Depends(get_db),
):
    summaries = DailySummaryRepository(db).list_for_user(user_id, start=start_date, end=end_date, limit=limit)
    return api_response(
        {"summaries": summaries, "stats": summary_stats(summaries)},
        "Daily summaries retrieved successfully",
    )


@router.get("/user/{user_id}/date/{day}")
def get_daily_summary_by_date(user_id: str, day: date, db: Session = Depends(get_db)):
    summary = DailySummaryRepository(db).get_by_date(user_id, day)
    if not summary:
        raise NotFoundError("Daily summary not found for this date")
    return api_response(summary, "Daily summary retrieved successfully")


@router.delete("/{summary_id}")
def delete_daily_summary(summary_id: str, db: Session = Depends(get_db)):
    if not DailySummaryRepository(db).delete(summary_id):
        raise NotFoundError("Daily summary not found")
    return api_response(None, "Daily summary deleted successfully")
