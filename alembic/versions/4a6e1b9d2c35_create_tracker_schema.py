"""Create tracker schema (users, problems, vocabularies, summaries, verifications)

Revision ID: 4a6e1b9d2c35
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a6e1b9d2c35"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("leetcode_username", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    for table, column in (("difficulties", "level"), ("languages", "name"), ("tags", "name")):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(column, sa.String(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(column),
        )

    op.create_table(
        "problems",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("leetcode_id", sa.Integer(), nullable=False),
        sa.Column("difficulty_id", sa.Integer(), nullable=False),
        sa.Column("language_id", sa.Integer(), nullable=False),
        sa.Column("time_spent_min", sa.Integer(), nullable=False),
        sa.Column("solved_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["difficulty_id"], ["difficulties.id"]),
        sa.ForeignKeyConstraint(["language_id"], ["languages.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("user_id", "leetcode_id", "difficulty_id", "language_id", "solved_at"):
        op.create_index(op.f(f"ix_problems_{column}"), "problems", [column], unique=False)

    op.create_table(
        "problem_tags",
        sa.Column("problem_id", sa.String(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["problem_id"], ["problems.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("problem_id", "tag_id"),
    )

    op.create_table(
        "daily_summaries",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("total_minutes", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_summary_user_date"),
    )
    op.create_index(op.f("ix_daily_summaries_user_id"), "daily_summaries", ["user_id"], unique=False)
    op.create_index(op.f("ix_daily_summaries_date"), "daily_summaries", ["date"], unique=False)

    op.create_table(
        "profile_verifications",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("leetcode_username", sa.String(), nullable=False),
        sa.Column("verification_code", sa.String(), nullable=False),
        sa.Column("verification_method", sa.String(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "leetcode_username", name="uq_profile_verification_user_username"),
    )
    op.create_index(
        op.f("ix_profile_verifications_user_id"), "profile_verifications", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_profile_verifications_leetcode_username"),
        "profile_verifications",
        ["leetcode_username"],
        unique=False,
    )
    # At most one verified claim per LeetCode username.
    op.create_index(
        "uq_profile_verification_verified_username",
        "profile_verifications",
        ["leetcode_username"],
        unique=True,
        sqlite_where=sa.text("is_verified = 1"),
        postgresql_where=sa.text("is_verified IS TRUE"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_profile_verification_verified_username", table_name="profile_verifications")
    op.drop_index(op.f("ix_profile_verifications_leetcode_username"), table_name="profile_verifications")
    op.drop_index(op.f("ix_profile_verifications_user_id"), table_name="profile_verifications")
    op.drop_table("profile_verifications")
    op.drop_index(op.f("ix_daily_summaries_date"), table_name="daily_summaries")
    op.drop_index(op.f("ix_daily_summaries_user_id"), table_name="daily_summaries")
    op.drop_table("daily_summaries")
    op.drop_table("problem_tags")
    for column in ("solved_at", "language_id", "difficulty_id", "leetcode_id", "user_id"):
        op.drop_index(op.f(f"ix_problems_{column}"), table_name="problems")
    op.drop_table("problems")
    for table in ("tags", "languages", "difficulties"):
        op.drop_table(table)
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
