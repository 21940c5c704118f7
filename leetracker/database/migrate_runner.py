"""Database migration runner for deploys.

Runs `alembic upgrade head`. When the tables already exist but Alembic has no
record of them (the schema was built by `create_all()`), the upgrade fails on
the first CREATE TABLE; in that case the expected schema is checked and, if
complete, the database is stamped at head instead.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Tuple

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from leetracker.database.database import DATABASE_URL, _is_sqlite_url, build_engine

logger = logging.getLogger(__name__)


def _alembic_cfg() -> Config:
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    return cfg


def _required_schema_checks() -> List[Tuple[str, str]]:
    """Return (table, column) pairs required to safely stamp head."""
    return [
        ("users", "username"),
        ("users", "leetcode_username"),
        ("difficulties", "level"),
        ("languages", "name"),
        ("tags", "name"),
        ("problems", "time_spent_min"),
        ("problems", "solved_at"),
        ("problem_tags", "tag_id"),
        ("daily_summaries", "total_minutes"),
        ("profile_verifications", "verification_code"),
        ("profile_verifications", "expires_at"),
    ]


def _missing_requirements(engine) -> List[str]:
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    missing: List[str] = []
    for table, column in _required_schema_checks():
        if table not in tables:
            missing.append(f"missing table: {table}")
            continue
        columns = {col["name"] for col in inspector.get_columns(table)}
        if column not in columns:
            missing.append(f"missing column: {table}.{column}")
    return sorted(set(missing))


def main() -> int:
    if _is_sqlite_url(DATABASE_URL):
        command.upgrade(_alembic_cfg(), "head")
        return 0

    engine = build_engine(DATABASE_URL)

    try:
        command.upgrade(_alembic_cfg(), "head")
        return 0
    except Exception as e:
        msg = str(e).lower()
        if "already exists" not in msg and "duplicate" not in msg:
            raise

        missing = _missing_requirements(engine)
        if missing:
            raise RuntimeError(
                "Alembic upgrade failed and schema is not at expected baseline; refusing to stamp head. "
                + "; ".join(missing)
            ) from e

        logger.info("Schema already present; stamping Alembic head")
        command.stamp(_alembic_cfg(), "head")
        return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
