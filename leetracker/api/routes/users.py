"""User routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leetracker.api.request_models import UserCreateRequest
from leetracker.api.responses import api_response
from leetracker.database.daily_summary_repository import DailySummaryRepository
from leetracker.database.database import get_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.user_repository import UserRepository
from leetracker.engine.analytics import compute_user_stats
from leetracker.errors import NotFoundError, ValidationError
from leetracker.models.constants import RECENT_SUMMARIES_LIMIT
from leetracker.models.user import UserProfile

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("")
def get_or_create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    """Get a user by username, creating it on first reference."""
    username = request.username.strip()
    if not username:
        raise ValidationError("Username is required")

    user = UserRepository(db).get_or_create(username)
    profile = UserProfile(
        **user.model_dump(),
        problems=ProblemRepository(db).get_all_for_user(user.id),
        daily_summaries=DailySummaryRepository(db).list_for_user(user.id, limit=RECENT_SUMMARIES_LIMIT),
    )
    return api_response(profile, "User retrieved successfully")


@router.get("/{user_id}/stats")
def get_user_stats(user_id: str, db: Session = Depends(get_db)):
    user = UserRepository(db).get(user_id)
    if not user:
        raise NotFoundError("User not found")

    stats = compute_user_stats(
        user,
        ProblemRepository(db).get_all_for_user(user_id),
        DailySummaryRepository(db).list_for_user(user_id, limit=RECENT_SUMMARIES_LIMIT),
    )
    return api_response(stats, "User stats retrieved successfully")
