"""Repository for User database operations."""

import logging
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from leetracker.models.user import User
from leetracker.database.models import UserDB, ProblemDB
from leetracker.database.upsert import insert_ignoring_conflict

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        user_db = self.db.query(UserDB).filter(UserDB.username == username).first()
        return user_db.to_pydantic() if user_db else None

    def exists(self, user_id: str) -> bool:
        return self.db.query(UserDB.id).filter(UserDB.id == user_id).first() is not None

    def get_or_create(self, username: str) -> User:
        """Get a user by username, creating it on first reference.

        Concurrent calls for the same username resolve to the same row.
        """
        try:
            insert_ignoring_conflict(self.db, UserDB, {"username": username}, ["username"])
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to get-or-create user {username}: {type(e).__name__}: {str(e)}")
            raise
        return self.get_by_username(username)

    def count(self) -> int:
        return self.db.query(func.count(UserDB.id)).scalar() or 0

    def problem_totals(self) -> List[Tuple[User, int, int]]:
        """Every user with (problem count, total minutes), in creation order."""
        rows = (
            self.db.query(
                UserDB,
                func.count(ProblemDB.id),
                func.coalesce(func.sum(ProblemDB.time_spent_min), 0),
            )
            .outerjoin(ProblemDB, ProblemDB.user_id == UserDB.id)
            .group_by(UserDB.id)
            .order_by(UserDB.created_at.asc(), UserDB.id.asc())
            .all()
        )
        return [(user_db.to_pydantic(), int(count), int(total)) for user_db, count, total in rows]
