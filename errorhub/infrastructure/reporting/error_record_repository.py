"""
Adapter: Error record repository.

Implements ErrorRecordRepository port.
Persists handled errors to the ``error_logs`` table through SQLAlchemy
Core, so any SQLAlchemy-supported database works (PostgreSQL in
production, SQLite in tests).
"""

import logging
from dataclasses import asdict
from typing import Optional

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    desc,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine

from errorhub.domain.reporting.entities import ErrorRecord
from errorhub.domain.reporting.ports import ErrorRecordRepository

logger = logging.getLogger(__name__)

metadata = MetaData()

error_logs = Table(
    "error_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("error_code", String(128), nullable=False, index=True),
    Column("severity", String(16), nullable=False, index=True),
    Column("blocking", String(16), nullable=False),
    Column("message", Text),
    Column("user_message", Text),
    Column("status_code", Integer, nullable=False),
    Column("display_mode", String(16), nullable=False),
    Column("context", JSON),
    Column("occurred_at", DateTime(timezone=True), nullable=False, index=True),
    Column("request_method", String(16)),
    Column("request_url", Text),
    Column("ip_address", String(64)),
    Column("user_agent", Text),
    Column("user_id", String(64)),
    Column("exception_class", String(255)),
    Column("exception_message", Text),
    Column("exception_file", Text),
    Column("exception_line", Integer),
    Column("exception_trace", Text),
)


class SqlErrorRecordRepository(ErrorRecordRepository):
    """SQLAlchemy implementation of the error record repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def ensure_schema(self) -> None:
        """Create the error_logs table if it does not exist."""
        metadata.create_all(self._engine, tables=[error_logs])

    def save(self, record: ErrorRecord) -> None:
        """Persist a single error record.

        Args:
            record: The record to insert.
        """
        with self._engine.begin() as conn:
            conn.execute(insert(error_logs).values(**asdict(record)))

        logger.debug("Saved error record for [%s].", record.error_code)

    def get_recent(self, limit: int = 10, code: Optional[str] = None) -> list[ErrorRecord]:
        """Return the most recent records, newest first.

        Args:
            limit: Maximum number of records to return.
            code: Optional filter by error code.
        """
        query = select(error_logs).order_by(desc(error_logs.c.occurred_at), desc(error_logs.c.id))
        if code is not None:
            query = query.where(error_logs.c.error_code == code)
        query = query.limit(limit)

        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()

        return [
            ErrorRecord(**{key: value for key, value in row.items() if key != "id"})
            for row in rows
        ]

    def count_by_code(self) -> dict[str, int]:
        """Return how many times each code was recorded."""
        query = select(error_logs.c.error_code, func.count()).group_by(error_logs.c.error_code)
        with self._engine.connect() as conn:
            return {code: count for code, count in conn.execute(query).all()}
