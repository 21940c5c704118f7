"""Repository layer for solved-problem records."""

import logging
from datetime import datetime
from typing import List, Optional, Set, Tuple
from sqlalchemy import func, desc
from sqlalchemy.orm import Session

from leetracker.errors import ValidationError
from leetracker.models.constants import DIFFICULTY_LEVELS
from leetracker.models.problem import Problem
from leetracker.database.models import ProblemDB, DifficultyDB, LanguageDB, TagDB
from leetracker.database.vocabulary_repository import (
    DifficultyRepository,
    LanguageRepository,
    TagRepository,
)

logger = logging.getLogger(__name__)

class ProblemRepository:
    """Repository for Problem database operations."""

    def __init__(self, db: Session):
        self.db = db
        self.difficulties = DifficultyRepository(db)
        self.languages = LanguageRepository(db)
        self.tags = TagRepository(db)

    def _as_unique_names(self, names: List[str]) -> List[str]:
        """Strip, drop blanks and deduplicate while preserving order."""
        seen: Set[str] = set()
        unique: List[str] = []
        for name in names:
            name = (name or "").strip()
            if name and name not in seen:
                seen.add(name)
                unique.append(name)
        return unique

    def _resolve_tags(self, tag_names: List[str]) -> List[TagDB]:
        return [self.tags.get_or_create_row(name) for name in self._as_unique_names(tag_names)]

    def _check_difficulty(self, difficulty_level: str) -> None:
        if difficulty_level not in DIFFICULTY_LEVELS:
            raise ValidationError(f"Difficulty level must be one of: {', '.join(DIFFICULTY_LEVELS)}")

    def _get_row(self, problem_id: str) -> Optional[ProblemDB]:
        return self.db.query(ProblemDB).filter(ProblemDB.id == problem_id).first()

    def create(
        self,
        user_id: str,
        title: str,
        leetcode_id: int,
        difficulty_level: str,
        language_name: str,
        time_spent_min: int,
        tag_names: Optional[List[str]] = None,
        solved_at: Optional[datetime] = None,
    ) -> Problem:
        """Create a problem, get-or-creating its difficulty, language and tags.

        Without `solved_at` the problem is stamped on the server's local clock,
        the same clock daily totals and streaks bucket days on.
        """
        self._check_difficulty(difficulty_level)
        try:
            difficulty = self.difficulties.get_or_create_row(difficulty_level)
            language = self.languages.get_or_create_row(language_name)
            tags = self._resolve_tags(tag_names or [])

            problem_db = ProblemDB(
                user_id=user_id,
                title=title,
                leetcode_id=leetcode_id,
                difficulty_id=difficulty.id,
                language_id=language.id,
                time_spent_min=time_spent_min,
                solved_at=solved_at or datetime.now(),
            )
            problem_db.tags = tags
            self.db.add(problem_db)
            self.db.commit()
            self.db.refresh(problem_db)
            logger.debug(f"Created problem {problem_db.id}: {title[:50]}")
            return problem_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create problem {title[:50]}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, problem_id: str) -> Optional[Problem]:
        """Get problem by ID."""
        problem_db = self._get_row(problem_id)
        return problem_db.to_pydantic() if problem_db else None

    def update(
        self,
        problem_id: str,
        title: Optional[str] = None,
        difficulty_level: Optional[str] = None,
        language_name: Optional[str] = None,
        tag_names: Optional[List[str]] = None,
        time_spent_min: Optional[int] = None,
        solved_at: Optional[datetime] = None,
    ) -> Optional[Problem]:
        """Apply a partial update; returns None if the problem does not exist.

        `tag_names`, when given, replaces the full tag set.
        """
        problem_db = self._get_row(problem_id)
        if not problem_db:
            return None
        if difficulty_level:
            self._check_difficulty(difficulty_level)

        try:
            if title:
                problem_db.title = title
            if time_spent_min:
                problem_db.time_spent_min = time_spent_min
            if solved_at:
                problem_db.solved_at = solved_at
            if difficulty_level:
                problem_db.difficulty = self.difficulties.get_or_create_row(difficulty_level)
            if language_name:
                problem_db.language = self.languages.get_or_create_row(language_name)
            if tag_names is not None:
                problem_db.tags = self._resolve_tags(tag_names)

            self.db.commit()
            self.db.refresh(problem_db)
            logger.debug(f"Updated problem {problem_id}")
            return problem_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update problem {problem_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, problem_id: str) -> bool:
        """Permanently delete a problem by ID."""
        problem_db = self._get_row(problem_id)
        if not problem_db:
            return False

        try:
            self.db.delete(problem_db)
            self.db.commit()
            logger.debug(f"Deleted problem {problem_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete problem {problem_id}: {type(e).__name__}: {str(e)}")
            raise

    def list_for_user(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        difficulty: Optional[str] = None,
        language: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Tuple[List[Problem], int]:
        """One page of a user's problems (newest first) and the filtered total."""
        query = self.db.query(ProblemDB).filter(ProblemDB.user_id == user_id)
        if difficulty:
            query = query.filter(ProblemDB.difficulty.has(DifficultyDB.level == difficulty))
        if language:
            query = query.filter(ProblemDB.language.has(LanguageDB.name == language))
        if tag:
            query = query.filter(ProblemDB.tags.any(TagDB.name == tag))

        total = query.count()
        problems_db = (
            query.order_by(desc(ProblemDB.solved_at))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [problem_db.to_pydantic() for problem_db in problems_db], total

    def get_all_for_user(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Problem]:
        """All of a user's problems solved within [start, end], newest first."""
        query = self.db.query(ProblemDB).filter(ProblemDB.user_id == user_id)
        if start is not None:
            query = query.filter(ProblemDB.solved_at >= start)
        if end is not None:
            query = query.filter(ProblemDB.solved_at <= end)
        problems_db = query.order_by(desc(ProblemDB.solved_at)).all()
        return [problem_db.to_pydantic() for problem_db in problems_db]

    def count(self) -> int:
        return self.db.query(func.count(ProblemDB.id)).scalar() or 0

    def total_time_spent(self) -> int:
        return int(self.db.query(func.coalesce(func.sum(ProblemDB.time_spent_min), 0)).scalar() or 0)
