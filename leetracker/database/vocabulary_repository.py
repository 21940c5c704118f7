"""Repositories for the reference vocabularies: tags, languages and difficulties."""

import logging
from typing import List, Optional, Tuple
from sqlalchemy import func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from leetracker.database.models import DifficultyDB, LanguageDB, TagDB, ProblemDB, problem_tags
from leetracker.database.upsert import insert_ignoring_conflict
from leetracker.errors import ConflictError, ValidationError
from leetracker.models.constants import DIFFICULTY_LEVELS, DEFAULT_POPULAR_LIMIT
from leetracker.models.vocabulary import VocabularyEntry, VocabularyDetail

logger = logging.getLogger(__name__)


class VocabularyRepository:
    """Shared CRUD for a unique-name vocabulary table.

    Subclasses set `model`, `label` and `name_attr`, and describe how problems
    reference the table in `_usage_query`.
    """

    model = None
    label = "Entry"
    name_attr = "name"

    def __init__(self, db: Session):
        self.db = db

    @property
    def _name_column(self):
        return getattr(self.model, self.name_attr)

    def _usage_query(self):
        """Query yielding (row, problem_count) pairs."""
        raise NotImplementedError

    def _usage_count_column(self):
        raise NotImplementedError

    def _default_order(self):
        return self._name_column.asc()

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError(f"{self.label} name is required")
        return name

    def _to_entry(self, row_and_count: Tuple) -> VocabularyEntry:
        row, count = row_and_count
        return row.to_pydantic(problem_count=int(count or 0))

    def _count_for(self, entry_id: int) -> Optional[Tuple]:
        return self._usage_query().filter(self.model.id == entry_id).first()

    def list_all(self) -> List[VocabularyEntry]:
        """All entries with their usage counts."""
        rows = self._usage_query().order_by(self._default_order()).all()
        return [self._to_entry(row) for row in rows]

    def popular(self, limit: int = DEFAULT_POPULAR_LIMIT) -> List[VocabularyEntry]:
        """Entries ordered by usage count, most used first."""
        count_col = self._usage_count_column()
        rows = (
            self._usage_query()
            .order_by(desc(func.count(count_col)), self.model.id.asc())
            .limit(limit)
            .all()
        )
        return [self._to_entry(row) for row in rows]

    def get(self, entry_id: int) -> Optional[VocabularyDetail]:
        """Get an entry by ID, including the problems that reference it."""
        found = self._count_for(entry_id)
        if not found:
            return None
        row, count = found
        problems = sorted(row.problems, key=lambda p: p.solved_at, reverse=True)
        entry = row.to_pydantic(problem_count=int(count or 0))
        return VocabularyDetail(
            **entry.model_dump(),
            problems=[problem.to_pydantic() for problem in problems],
        )

    def get_by_name(self, name: str) -> Optional[VocabularyEntry]:
        row = self.db.query(self.model).filter(self._name_column == name).first()
        if not row:
            return None
        return self._to_entry(self._count_for(row.id))

    def get_or_create_row(self, name: str):
        """Return the row for `name`, inserting it if missing (no commit)."""
        name = self._validate_name(name)
        insert_ignoring_conflict(self.db, self.model, {self.name_attr: name}, [self.name_attr])
        return self.db.query(self.model).filter(self._name_column == name).one()

    def create(self, name: str) -> VocabularyEntry:
        """Create a new entry; raises ConflictError if the name is taken."""
        name = self._validate_name(name)
        if self.db.query(self.model.id).filter(self._name_column == name).first():
            raise ConflictError(f"{self.label} already exists")

        try:
            row = self.model(**{self.name_attr: name})
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created {self.label.lower()} {row.id}: {name}")
            return row.to_pydantic(problem_count=0)
        except IntegrityError as e:
            self.db.rollback()
            logger.debug(f"Concurrent create of {self.label.lower()} {name}: {e}")
            raise ConflictError(f"{self.label} already exists") from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create {self.label.lower()} {name}: {type(e).__name__}: {str(e)}")
            raise

    def update(self, entry_id: int, name: str) -> Optional[VocabularyEntry]:
        """Rename an entry; returns None if it does not exist."""
        name = self._validate_name(name)
        row = self.db.query(self.model).filter(self.model.id == entry_id).first()
        if not row:
            return None

        clash = self.db.query(self.model.id).filter(self._name_column == name).first()
        if clash and clash[0] != entry_id:
            raise ConflictError(f"{self.label} with this name already exists")

        try:
            setattr(row, self.name_attr, name)
            self.db.commit()
            logger.debug(f"Renamed {self.label.lower()} {entry_id} to {name}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update {self.label.lower()} {entry_id}: {type(e).__name__}: {str(e)}")
            raise
        return self._to_entry(self._count_for(entry_id))

    def delete(self, entry_id: int) -> bool:
        """Delete an unused entry; returns False if it does not exist."""
        found = self._count_for(entry_id)
        if not found:
            return False
        row, count = found
        if count:
            raise ValidationError(
                f"Cannot delete {self.label.lower()}. It is associated with {count} problem(s)"
            )

        try:
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted {self.label.lower()} {entry_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete {self.label.lower()} {entry_id}: {type(e).__name__}: {str(e)}")
            raise


class TagRepository(VocabularyRepository):
    """Repository for Tag database operations."""

    model = TagDB
    label = "Tag"

    def _usage_count_column(self):
        return problem_tags.c.problem_id

    def _usage_query(self):
        return (
            self.db.query(TagDB, func.count(problem_tags.c.problem_id))
            .outerjoin(problem_tags, problem_tags.c.tag_id == TagDB.id)
            .group_by(TagDB.id)
        )


class LanguageRepository(VocabularyRepository):
    """Repository for Language database operations."""

    model = LanguageDB
    label = "Language"

    def _usage_count_column(self):
        return ProblemDB.id

    def _usage_query(self):
        return (
            self.db.query(LanguageDB, func.count(ProblemDB.id))
            .outerjoin(ProblemDB, ProblemDB.language_id == LanguageDB.id)
            .group_by(LanguageDB.id)
        )


class DifficultyRepository(VocabularyRepository):
    """Repository for Difficulty database operations.

    Levels are restricted to DIFFICULTY_LEVELS.
    """

    model = DifficultyDB
    label = "Difficulty"
    name_attr = "level"

    def _default_order(self):
        return DifficultyDB.id.asc()

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Difficulty level is required")
        if name not in DIFFICULTY_LEVELS:
            raise ValidationError(f"Difficulty level must be one of: {', '.join(DIFFICULTY_LEVELS)}")
        return name

    def _usage_count_column(self):
        return ProblemDB.id

    def _usage_query(self):
        return (
            self.db.query(DifficultyDB, func.count(ProblemDB.id))
            .outerjoin(ProblemDB, ProblemDB.difficulty_id == DifficultyDB.id)
            .group_by(DifficultyDB.id)
        )

    def initialize_defaults(self) -> List[VocabularyEntry]:
        """Create any missing default levels; returns the ones created."""
        existing = {row[0] for row in self.db.query(DifficultyDB.level).all()}
        missing = [level for level in DIFFICULTY_LEVELS if level not in existing]
        if not missing:
            return []

        try:
            for level in missing:
                insert_ignoring_conflict(self.db, DifficultyDB, {"level": level}, ["level"])
            self.db.commit()
            logger.debug(f"Initialized difficulties: {missing}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to initialize difficulties: {type(e).__name__}: {str(e)}")
            raise
        return [self.get_by_name(level) for level in missing]
