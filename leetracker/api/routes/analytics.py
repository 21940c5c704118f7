"""Analytics routes."""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leetracker.api.responses import api_response
from leetracker.database.database import get_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.user_repository import UserRepository
from leetracker.engine.analytics import compute_platform_analytics, compute_user_analytics, rank_leaderboard
from leetracker.errors import NotFoundError
from leetracker.models.constants import DEFAULT_LEADERBOARD_LIMIT

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/user/{user_id}")
def get_user_analytics(
    user_id: str,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """Overview, breakdowns and top tags for a user, optionally within a date range."""
    user = UserRepository(db).get(user_id)
    if not user:
        raise NotFoundError("User not found")

    problems = ProblemRepository(db).get_all_for_user(user_id, start=start_date, end=end_date)
    analytics = compute_user_analytics(problems, user=user, start_date=start_date, end_date=end_date)
    return api_response(analytics, "User analytics retrieved successfully")


@router.get("/platform")
def get_platform_analytics(db: Session = Depends(get_db)):
    problems = ProblemRepository(db)
    analytics = compute_platform_analytics(
        total_users=UserRepository(db).count(),
        total_problems=problems.count(),
        total_time_spent=problems.total_time_spent(),
    )
    return api_response(analytics, "Platform analytics retrieved successfully")


@router.get("/leaderboard")
def get_leaderboard(limit: int = Query(DEFAULT_LEADERBOARD_LIMIT, ge=1), db: Session = Depends(get_db)):
    leaderboard = rank_leaderboard(UserRepository(db).problem_totals(), limit=limit)
    return api_response(leaderboard, "Leaderboard retrieved successfully")
