"""Data access repository for jobs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from jobly.core.exceptions import RepositoryError
from jobly.core.sql import JOB_SEARCH_FILTERS, build_search_fragment, build_update_fragment
from jobly.repositories.base import BaseRepository, Row

JOB_COLUMNS = "id, title, salary, CAST(equity AS double precision) AS equity, company_handle"

JOB_COLUMN_MAP: dict[str, str] = {"companyHandle": "company_handle"}

UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})


class JobRepository(BaseRepository):
    """Repository responsible for the ``jobs`` table."""

    table = "jobs"

    async def create(self, data: Mapping[str, Any]) -> Row:
        """Insert a job.

        Args:
            data: Mapping with ``title``, ``salary``, ``equity`` and
                ``companyHandle``.

        Returns:
            The inserted job row.

        Raises:
            InvalidInputError: If the company handle does not exist.
            RepositoryError: If the insert fails.
        """
        logger.bind(
            repository=self.__class__.__name__, company_handle=data["companyHandle"]
        ).info("Creating job")
        row = await self._write(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [
                data["title"],
                data.get("salary"),
                data.get("equity"),
                data["companyHandle"],
            ],
            query_type="jobs.create",
        )
        if row is None:
            raise RepositoryError("Failed to create job")
        return row

    async def find_all(self, criteria: Mapping[str, Any] | None = None) -> list[Row]:
        """Fetch jobs matching optional search criteria, ordered by id.

        Args:
            criteria: Any of ``title``, ``minSalary``, ``hasEquity``,
                ``companyHandle``.

        Returns:
            Matching job rows.
        """
        fragment = build_search_fragment(criteria or {}, JOB_SEARCH_FILTERS)
        return await self._fetch_all(
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                {fragment.where_clause()}
                ORDER BY id""",
            fragment.values,
            query_type="jobs.find_all",
        )

    async def get(self, job_id: int) -> Row | None:
        """Fetch one job by id."""
        return await self._fetch_one(
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
            [job_id],
            query_type="jobs.get",
        )

    async def update(self, job_id: int, data: Mapping[str, Any]) -> Row | None:
        """Apply a partial update.

        Returns:
            The updated row, or ``None`` when no job has this id.

        Raises:
            InvalidInputError: If ``data`` is empty or holds a non-updatable key.
        """
        self._check_update_fields(data, UPDATABLE_FIELDS)
        fragment = build_update_fragment(data, JOB_COLUMN_MAP)
        id_index = len(fragment.values) + 1

        return await self._write(
            f"""UPDATE jobs
                SET {fragment.set_cols}, updated_at = now()
                WHERE id = ${id_index}
                RETURNING {JOB_COLUMNS}""",
            [*fragment.values, job_id],
            query_type="jobs.update",
        )

    async def remove(self, job_id: int) -> bool:
        """Delete a job.

        Returns:
            ``True`` when deleted, ``False`` when not found.
        """
        row = await self._write(
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            [job_id],
            query_type="jobs.remove",
        )
        return row is not None
