"""Repository for LeetCode profile verification records."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from leetracker.database.models import ProfileVerificationDB, UserDB
from leetracker.models.constants import VERIFICATION_METHOD_PROFILE_BIO
from leetracker.models.verification import ProfileVerification

logger = logging.getLogger(__name__)


class VerificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, user_id: str, leetcode_username: str) -> Optional[ProfileVerificationDB]:
        return (
            self.db.query(ProfileVerificationDB)
            .filter(
                ProfileVerificationDB.user_id == user_id,
                ProfileVerificationDB.leetcode_username == leetcode_username,
            )
            .first()
        )

    def get(self, user_id: str, leetcode_username: str) -> Optional[ProfileVerification]:
        row = self._get_row(user_id, leetcode_username)
        return row.to_pydantic() if row else None

    def find_verified_by_other_user(self, leetcode_username: str, user_id: str) -> Optional[ProfileVerification]:
        """A verified record for this LeetCode username held by a different user."""
        row = (
            self.db.query(ProfileVerificationDB)
            .filter(
                ProfileVerificationDB.leetcode_username == leetcode_username,
                ProfileVerificationDB.is_verified.is_(True),
                ProfileVerificationDB.user_id != user_id,
            )
            .first()
        )
        return row.to_pydantic() if row else None

    def latest_verified(self, user_id: str) -> Optional[ProfileVerification]:
        """The user's most recently verified record, if any."""
        row = (
            self.db.query(ProfileVerificationDB)
            .filter(
                ProfileVerificationDB.user_id == user_id,
                ProfileVerificationDB.is_verified.is_(True),
            )
            .order_by(desc(ProfileVerificationDB.verified_at))
            .first()
        )
        return row.to_pydantic() if row else None

    def upsert_pending(
        self,
        user_id: str,
        leetcode_username: str,
        verification_code: str,
        expires_at: datetime,
    ) -> ProfileVerification:
        """Store a fresh unverified code for the pair, replacing any previous one."""
        row = self._get_row(user_id, leetcode_username)
        now = datetime.utcnow()
        try:
            if row is None:
                row = ProfileVerificationDB(
                    user_id=user_id,
                    leetcode_username=leetcode_username,
                    verification_code=verification_code,
                    verification_method=VERIFICATION_METHOD_PROFILE_BIO,
                    is_verified=False,
                    expires_at=expires_at,
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(row)
            else:
                row.verification_code = verification_code
                row.verification_method = VERIFICATION_METHOD_PROFILE_BIO
                row.is_verified = False
                row.verified_at = None
                row.expires_at = expires_at
                row.updated_at = now

            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Stored pending verification for user {user_id} / {leetcode_username}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to store verification for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def mark_verified(self, user_id: str, leetcode_username: str) -> Optional[ProfileVerification]:
        """Flip the pair to verified and link the username on the user, in one commit.

        Any other verified record the user holds is demoted back to unverified,
        so a user has at most one verified profile.
        """
        row = self._get_row(user_id, leetcode_username)
        if row is None:
            return None
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()

        try:
            demoted = (
                self.db.query(ProfileVerificationDB)
                .filter(
                    ProfileVerificationDB.user_id == user_id,
                    ProfileVerificationDB.leetcode_username != leetcode_username,
                    ProfileVerificationDB.is_verified.is_(True),
                )
                .update(
                    {ProfileVerificationDB.is_verified: False, ProfileVerificationDB.verified_at: None},
                    synchronize_session=False,
                )
            )
            if demoted:
                logger.debug(f"Demoted {demoted} earlier verified records for user {user_id}")
            row.is_verified = True
            row.verified_at = datetime.utcnow()
            if user_db is not None:
                user_db.leetcode_username = leetcode_username
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Marked {leetcode_username} verified for user {user_id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to mark verification for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_all_for_user(self, user_id: str) -> int:
        """Delete every verification record for a user and unlink the username.

        Returns number of verification rows deleted.
        """
        try:
            affected = (
                self.db.query(ProfileVerificationDB)
                .filter(ProfileVerificationDB.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.query(UserDB).filter(UserDB.id == user_id).update(
                {UserDB.leetcode_username: None}, synchronize_session=False
            )
            self.db.commit()
            logger.debug(f"Removed {affected} verification records for user {user_id}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to remove verifications for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
