"""Profile verification data model for LeeTracker."""

from datetime import datetime
from typing import Optional
from pydantic import Field

from leetracker.models.base import CamelModel


class ProfileVerification(CamelModel):
    """Verification record for a (user, LeetCode username) pair."""

    id: str
    user_id: str
    leetcode_username: str
    verification_code: str
    verification_method: str
    is_verified: bool = False
    expires_at: datetime
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now


class VerificationStatus(CamelModel):
    """Whether a user has a verified LeetCode profile."""

    has_verified_profile: bool
    verified_username: Optional[str] = None
    verified_at: Optional[datetime] = None


class VerificationChallenge(CamelModel):
    """Code and instructions handed to the user on initiate."""

    verification_code: str
    instructions: list = Field(default_factory=list)
    expires_at: datetime
