"""SQLAlchemy database models for LeeTracker."""

from datetime import datetime
import uuid
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from leetracker.database.database import Base
from leetracker.models.constants import VERIFICATION_METHOD_PROFILE_BIO


problem_tags = Table(
    "problem_tags",
    Base.metadata,
    Column("problem_id", String, ForeignKey("problems.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, nullable=False, unique=True, index=True)

    # Linked (verified) LeetCode profile
    leetcode_username = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    problems = relationship(
        "ProblemDB",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProblemDB.solved_at.desc()",
    )
    summaries = relationship(
        "DailySummaryDB",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DailySummaryDB.date.desc()",
    )

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from leetracker.models.user import User
        return User(
            id=self.id,
            username=self.username,
            leetcode_username=self.leetcode_username,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class DifficultyDB(Base):
    """Database model for a difficulty level (Easy / Medium / Hard)."""

    __tablename__ = "difficulties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String, nullable=False, unique=True)

    problems = relationship("ProblemDB", back_populates="difficulty")

    def to_pydantic(self, problem_count: int = 0):
        from leetracker.models.vocabulary import VocabularyEntry
        return VocabularyEntry(id=self.id, name=self.level, problem_count=problem_count)


class LanguageDB(Base):
    """Database model for a programming language."""

    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)

    problems = relationship("ProblemDB", back_populates="language")

    def to_pydantic(self, problem_count: int = 0):
        from leetracker.models.vocabulary import VocabularyEntry
        return VocabularyEntry(id=self.id, name=self.name, problem_count=problem_count)


class TagDB(Base):
    """Database model for a problem tag (topic)."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)

    problems = relationship("ProblemDB", secondary=problem_tags, back_populates="tags")

    def to_pydantic(self, problem_count: int = 0):
        from leetracker.models.vocabulary import VocabularyEntry
        return VocabularyEntry(id=self.id, name=self.name, problem_count=problem_count)


class ProblemDB(Base):
    """Database model for a solved problem."""

    __tablename__ = "problems"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False)
    leetcode_id = Column(Integer, nullable=False, index=True)

    difficulty_id = Column(Integer, ForeignKey("difficulties.id"), nullable=False, index=True)
    language_id = Column(Integer, ForeignKey("languages.id"), nullable=False, index=True)

    time_spent_min = Column(Integer, nullable=False)
    solved_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("UserDB", back_populates="problems")
    difficulty = relationship("DifficultyDB", back_populates="problems", lazy="joined")
    language = relationship("LanguageDB", back_populates="problems", lazy="joined")
    tags = relationship(
        "TagDB",
        secondary=problem_tags,
        back_populates="problems",
        order_by="TagDB.id",
        lazy="selectin",
    )

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from leetracker.models.problem import Problem
        return Problem(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            leetcode_id=self.leetcode_id,
            difficulty=self.difficulty.level,
            language=self.language.name,
            tags=[tag.name for tag in self.tags],
            time_spent_min=self.time_spent_min,
            solved_at=self.solved_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class DailySummaryDB(Base):
    """Database model for a per-user, per-day time summary."""

    __tablename__ = "daily_summaries"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_summary_user_date"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    total_minutes = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("UserDB", back_populates="summaries")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from leetracker.models.daily_summary import DailySummary
        return DailySummary(
            id=self.id,
            user_id=self.user_id,
            date=self.date,
            total_minutes=self.total_minutes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ProfileVerificationDB(Base):
    """Pending or completed LeetCode profile verification for a user.

    One row per (user, leetcode_username). A LeetCode username can be verified
    by at most one user; the partial unique index below backs the application
    checks in the verification workflow.
    """

    __tablename__ = "profile_verifications"
    __table_args__ = (
        UniqueConstraint("user_id", "leetcode_username", name="uq_profile_verification_user_username"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    leetcode_username = Column(String, nullable=False, index=True)

    verification_code = Column(String, nullable=False)
    verification_method = Column(String, nullable=False, default=VERIFICATION_METHOD_PROFILE_BIO)
    is_verified = Column(Boolean, nullable=False, default=False)
    expires_at = Column(DateTime, nullable=False)
    verified_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from leetracker.models.verification import ProfileVerification
        return ProfileVerification(
            id=self.id,
            user_id=self.user_id,
            leetcode_username=self.leetcode_username,
            verification_code=self.verification_code,
            verification_method=self.verification_method,
            is_verified=self.is_verified,
            expires_at=self.expires_at,
            verified_at=self.verified_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


Index(
    "uq_profile_verification_verified_username",
    ProfileVerificationDB.leetcode_username,
    unique=True,
    sqlite_where=ProfileVerificationDB.is_verified.is_(True),
    postgresql_where=ProfileVerificationDB.is_verified.is_(True),
)
