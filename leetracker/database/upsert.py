"""Race-free conditional inserts for rows keyed by a unique column."""

import logging
from typing import List

from sqlalchemy import insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def insert_ignoring_conflict(db: Session, model, values: dict, conflict_columns: List[str]) -> None:
    """Insert a row unless one with the same unique key already exists.

    Runs as a single statement (`INSERT ... ON CONFLICT DO NOTHING`) on SQLite
    and PostgreSQL. Other dialects insert inside a SAVEPOINT and treat a
    uniqueness violation as "already exists". Does not commit; the caller
    re-fetches the row and owns the transaction.
    """
    dialect = db.get_bind().dialect.name

    if dialect in ("sqlite", "postgresql"):
        dialect_insert = sqlite_insert if dialect == "sqlite" else pg_insert
        stmt = dialect_insert(model).values(**values).on_conflict_do_nothing(
            index_elements=conflict_columns
        )
        db.execute(stmt)
        return

    try:
        with db.begin_nested():
            db.execute(insert(model).values(**values))
    except IntegrityError:
        logger.debug(f"{model.__tablename__} row {values} already exists, re-fetching")
