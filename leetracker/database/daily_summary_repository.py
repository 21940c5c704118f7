"""Repository for DailySummary database operations."""

import logging
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.orm import Session

from leetracker.models.daily_summary import DailySummary
from leetracker.database.models import DailySummaryDB

logger = logging.getLogger(__name__)


class DailySummaryRepository:
    """Repository for DailySummary database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, summary_id: str) -> Optional[DailySummary]:
        summary_db = self.db.query(DailySummaryDB).filter(DailySummaryDB.id == summary_id).first()
        return summary_db.to_pydantic() if summary_db else None

    def get_by_date(self, user_id: str, day: date) -> Optional[DailySummary]:
        """Get the summary for a user on a calendar day."""
        summary_db = self.db.query(DailySummaryDB).filter(
            DailySummaryDB.user_id == user_id,
            DailySummaryDB.date == day,
        ).first()
        return summary_db.to_pydantic() if summary_db else None

    def upsert(self, user_id: str, day: date, total_minutes: int) -> Tuple[DailySummary, bool]:
        """Create or update the (user, day) summary.

        Returns:
            (summary, created) where created is False when an existing row was updated
        """
        summary_db = self.db.query(DailySummaryDB).filter(
            DailySummaryDB.user_id == user_id,
            DailySummaryDB.date == day,
        ).first()
        created = summary_db is None

        try:
            if created:
                summary_db = DailySummaryDB(user_id=user_id, date=day, total_minutes=total_minutes)
                self.db.add(summary_db)
            else:
                summary_db.total_minutes = total_minutes
            self.db.commit()
            self.db.refresh(summary_db)
            logger.debug(f"{'Created' if created else 'Updated'} daily summary {user_id}/{day}: {total_minutes} min")
            return summary_db.to_pydantic(), created
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to upsert daily summary {user_id}/{day}: {type(e).__name__}: {str(e)}")
            raise

    def list_for_user(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = 30,
    ) -> List[DailySummary]:
        """A user's summaries, most recent day first."""
        query = self.db.query(DailySummaryDB).filter(DailySummaryDB.user_id == user_id)
        if start is not None:
            query = query.filter(DailySummaryDB.date >= start)
        if end is not None:
            query = query.filter(DailySummaryDB.date <= end)
        summaries_db = query.order_by(desc(DailySummaryDB.date)).limit(limit).all()
        return [summary_db.to_pydantic() for summary_db in summaries_db]

    def delete(self, summary_id: str) -> bool:
        summary_db = self.db.query(DailySummaryDB).filter(DailySummaryDB.id == summary_id).first()
        if not summary_db:
            return False

        try:
            self.db.delete(summary_db)
            self.db.commit()
            logger.debug(f"Deleted daily summary {summary_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete daily summary {summary_id}: {type(e).__name__}: {str(e)}")
            raise
