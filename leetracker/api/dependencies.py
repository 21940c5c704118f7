"""FastAPI dependencies for LeeTracker routes."""

from fastapi import Depends
from sqlalchemy.orm import Session

from leetracker.database.database import get_db
from leetracker.integrations.leetcode import LeetCodeClient
from leetracker.verification.workflow import ProfileVerificationService


def get_profile_client() -> LeetCodeClient:
    """Profile lookup used by verification (overridden in tests)."""
    return LeetCodeClient()


def get_verification_service(
    db: Session = Depends(get_db),
    profile_client=Depends(get_profile_client),
) -> ProfileVerificationService:
    return ProfileVerificationService(db, profile_client)
