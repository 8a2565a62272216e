"""Shared helpers for repositories executing parameterized SQL."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import TextClause

from jobly.core.exceptions import DuplicateError, InvalidInputError, RepositoryError
from jobly.core.metrics import db_query_timer

_POSITIONAL_PLACEHOLDER = re.compile(r"\$(\d+)")

Row = dict[str, Any]


def bind_positional(
    sql: str, values: Sequence[Any]
) -> tuple[TextClause, dict[str, Any]]:
    """Rewrite ``$n`` placeholders as named binds ``:pn`` for SQLAlchemy.

    Args:
        sql: Statement using 1-based ``$n`` placeholders.
        values: Positional values; ``values[n - 1]`` binds to ``$n``.

    Returns:
        The text clause and its parameter mapping.

    Raises:
        ValueError: If placeholders and values disagree.
    """
    indexes = {int(match) for match in _POSITIONAL_PLACEHOLDER.findall(sql)}
    if indexes != set(range(1, len(values) + 1)):
        raise ValueError(
            f"SQL placeholders {sorted(indexes)} do not match {len(values)} values"
        )

    statement = text(_POSITIONAL_PLACEHOLDER.sub(r":p\1", sql))
    params = {f"p{index}": value for index, value in enumerate(values, start=1)}
    return statement, params


class BaseRepository:
    """Base repository with statement execution and error translation."""

    table: str = ""

    def __init__(self, db: AsyncSession):
        """Initialize repository with a session.

        Args:
            db: Active asynchronous SQLAlchemy session.
        """
        self.db = db

    async def _fetch_all(
        self, sql: str, values: Sequence[Any] = (), *, query_type: str
    ) -> list[Row]:
        """Run a read statement and return every row as a dict."""
        statement, params = bind_positional(sql, values)
        log = logger.bind(repository=self.__class__.__name__, query_type=query_type)
        try:
            with db_query_timer(query_type):
                result = await self.db.execute(statement, params)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            log.bind(error=str(exc)).error("Query failed")
            raise RepositoryError(f"Failed to read {self.table}.") from exc

    async def _fetch_one(
        self, sql: str, values: Sequence[Any] = (), *, query_type: str
    ) -> Row | None:
        """Run a read statement and return the first row, if any."""
        rows = await self._fetch_all(sql, values, query_type=query_type)
        return rows[0] if rows else None

    async def _write(
        self, sql: str, values: Sequence[Any] = (), *, query_type: str
    ) -> Row | None:
        """Run a write statement, commit, and return its first ``RETURNING`` row.

        Raises:
            DuplicateError: If a unique or primary key constraint is violated.
            RepositoryError: For any other database failure.
        """
        statement, params = bind_positional(sql, values)
        log = logger.bind(repository=self.__class__.__name__, query_type=query_type)
        try:
            with db_query_timer(query_type):
                result = await self.db.execute(statement, params)
                row = result.mappings().first()
                await self.db.commit()
        except IntegrityError as exc:
            await self._rollback_safely()
            if self._is_unique_violation(exc):
                log.bind(error=str(exc)).warning("Unique constraint violated")
                raise DuplicateError(f"Duplicate {self.table} record.") from exc
            if self._is_foreign_key_violation(exc):
                log.bind(error=str(exc)).warning("Foreign key constraint violated")
                raise InvalidInputError(
                    f"Referenced record for {self.table} does not exist."
                ) from exc
            log.bind(error=str(exc)).error("Integrity error during write")
            raise RepositoryError(
                f"Failed to write {self.table} due to integrity error."
            ) from exc
        except SQLAlchemyError as exc:
            await self._rollback_safely()
            log.bind(error=str(exc)).error("Database error during write")
            raise RepositoryError(f"Failed to write {self.table}.") from exc

        return dict(row) if row is not None else None

    async def _rollback_safely(self) -> None:
        """Attempt rollback and preserve the original error context."""
        try:
            await self.db.rollback()
        except SQLAlchemyError as exc:
            logger.bind(
                repository=self.__class__.__name__,
                error=str(exc),
            ).error("Rollback failed")

    @staticmethod
    def _check_update_fields(
        data: Mapping[str, Any], allowed: frozenset[str]
    ) -> None:
        """Reject update keys outside the resource's fixed vocabulary.

        Raises:
            InvalidInputError: If any key is not allow-listed.
        """
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise InvalidInputError(
                f"Unknown or protected update field(s): {', '.join(unknown)}"
            )

    @staticmethod
    def _is_unique_violation(error: IntegrityError) -> bool:
        """Check whether an integrity error is a unique or primary key violation.

        Note:
            Detection relies on PostgreSQL error message text.
        """
        error_text = (
            str(error.orig).lower() if error.orig is not None else str(error).lower()
        )
        return "duplicate key value violates unique constraint" in error_text or (
            "unique constraint" in error_text
        )

    @staticmethod
    def _is_foreign_key_violation(error: IntegrityError) -> bool:
        error_text = (
            str(error.orig).lower() if error.orig is not None else str(error).lower()
        )
        return "foreign key constraint" in error_text
