"""Profile verification workflow.

Per (user, LeetCode username) pair the record moves through
`unrequested -> pending -> verified`. A pending code stops being usable once
it expires (checked lazily on verify); `remove` returns the user to
`unrequested`.

Ownership is proven by placing the issued code in the public profile bio.
Anyone able to read the bio during the window could replay it; that weakness
is part of the contract.
"""

import logging
import os
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from leetracker.database.user_repository import UserRepository
from leetracker.database.verification_repository import VerificationRepository
from leetracker.errors import (
    AlreadyVerifiedError,
    CodeNotFoundError,
    NotFoundError,
    ProfileClaimedError,
    ValidationError,
    VerificationExpiredError,
)
from leetracker.models.constants import VERIFICATION_CODE_TTL_HOURS
from leetracker.models.verification import (
    ProfileVerification,
    VerificationChallenge,
    VerificationStatus,
)
from leetracker.verification.codes import generate_verification_code

load_dotenv()

logger = logging.getLogger(__name__)

CODE_TTL_HOURS = int(os.getenv("VERIFICATION_CODE_TTL_HOURS", str(VERIFICATION_CODE_TTL_HOURS)))


def verification_instructions(ttl_hours: int) -> List[str]:
    """Steps shown to the user alongside a freshly issued code."""
    return [
        "1. Go to your LeetCode profile settings",
        "2. Add this verification code to your profile bio or summary",
        "3. Save your profile changes",
        '4. Come back here and click "Verify Profile"',
        "",
        "Note: You can remove the code from your bio after verification is complete.",
        f"This verification code expires in {ttl_hours} hours.",
    ]


def _utcnow() -> datetime:
    return datetime.utcnow()


class ProfileVerificationService:
    """Runs initiate / verify / status / remove against the store.

    Args:
        db: Database session
        profile_client: Object with `fetch_bio(username) -> Optional[str]`
            (None when the profile does not exist)
        clock: Returns the current naive UTC time
    """

    def __init__(self, db: Session, profile_client, clock: Optional[Callable[[], datetime]] = None):
        self.users = UserRepository(db)
        self.verifications = VerificationRepository(db)
        self.profile_client = profile_client
        self.clock = clock or _utcnow

    def _require_user(self, user_id: str) -> None:
        if not user_id:
            raise ValidationError("User ID is required")
        if not self.users.exists(user_id):
            raise NotFoundError("User not found")

    def _ensure_unclaimed(self, user_id: str, leetcode_username: str) -> None:
        if self.verifications.find_verified_by_other_user(leetcode_username, user_id):
            raise ProfileClaimedError(leetcode_username)

    def initiate(self, user_id: str, leetcode_username: str) -> VerificationChallenge:
        """Issue a fresh code for the pair, replacing any earlier one."""
        if not user_id or not leetcode_username:
            raise ValidationError("LeetCode username and user ID are required")
        self._require_user(user_id)
        self._ensure_unclaimed(user_id, leetcode_username)

        code = generate_verification_code()
        expires_at = self.clock() + timedelta(hours=CODE_TTL_HOURS)
        self.verifications.upsert_pending(user_id, leetcode_username, code, expires_at)
        logger.info(f"Verification initiated for user {user_id} / {leetcode_username}")

        return VerificationChallenge(
            verification_code=code,
            instructions=verification_instructions(CODE_TTL_HOURS),
            expires_at=expires_at,
        )

    def verify(self, user_id: str, leetcode_username: str) -> ProfileVerification:
        """Check the issued code against the live profile bio and link the profile."""
        if not user_id or not leetcode_username:
            raise ValidationError("User ID and LeetCode username are required")

        record = self.verifications.get(user_id, leetcode_username)
        if record is None:
            raise NotFoundError("No verification request found. Please initiate verification first.")
        if record.is_expired(self.clock()):
            raise VerificationExpiredError()
        if record.is_verified:
            raise AlreadyVerifiedError()
        self._ensure_unclaimed(user_id, leetcode_username)

        bio = self.profile_client.fetch_bio(leetcode_username)
        if bio is None:
            raise NotFoundError(f"LeetCode profile '{leetcode_username}' not found")
        if record.verification_code not in bio:
            logger.info(f"Verification code not found in bio for user {user_id} / {leetcode_username}")
            raise CodeNotFoundError()

        verified = self.verifications.mark_verified(user_id, leetcode_username)
        logger.info(f"LeetCode profile {leetcode_username} verified for user {user_id}")
        return verified

    def status(self, user_id: str) -> VerificationStatus:
        self._require_user(user_id)
        latest: Optional[ProfileVerification] = self.verifications.latest_verified(user_id)
        return VerificationStatus(
            has_verified_profile=latest is not None,
            verified_username=latest.leetcode_username if latest else None,
            verified_at=latest.verified_at if latest else None,
        )

    def remove(self, user_id: str) -> int:
        """Drop all of the user's verification records and unlink the profile."""
        self._require_user(user_id)
        removed = self.verifications.delete_all_for_user(user_id)
        logger.info(f"Removed {removed} verification records for user {user_id}")
        return removed
