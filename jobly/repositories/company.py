"""Data access repository for companies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from jobly.core.exceptions import RepositoryError
from jobly.core.sql import (
    COMPANY_SEARCH_FILTERS,
    build_search_fragment,
    build_update_fragment,
)
from jobly.repositories.base import BaseRepository, Row

COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"

COMPANY_COLUMN_MAP: dict[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

UPDATABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})


class CompanyRepository(BaseRepository):
    """Repository responsible for the ``companies`` table."""

    table = "companies"

    async def create(self, data: Mapping[str, Any]) -> Row:
        """Insert a company.

        Args:
            data: Mapping with ``handle``, ``name``, ``description``,
                ``numEmployees`` and ``logoUrl``.

        Returns:
            The inserted company row.

        Raises:
            DuplicateError: If the handle or name already exists.
            RepositoryError: If the insert fails.
        """
        logger.bind(repository=self.__class__.__name__, handle=data["handle"]).info(
            "Creating company"
        )
        row = await self._write(
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                data["handle"],
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
            query_type="companies.create",
        )
        if row is None:
            raise RepositoryError("Failed to create company")
        return row

    async def find_all(self, criteria: Mapping[str, Any] | None = None) -> list[Row]:
        """Fetch companies matching optional search criteria, ordered by name.

        Args:
            criteria: Any of ``nameLike``, ``minEmployees``, ``maxEmployees``.

        Returns:
            Matching company rows.
        """
        fragment = build_search_fragment(criteria or {}, COMPANY_SEARCH_FILTERS)
        logger.bind(
            repository=self.__class__.__name__, filters=fragment.text or "-"
        ).debug("Searching companies")
        return await self._fetch_all(
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                {fragment.where_clause()}
                ORDER BY name""",
            fragment.values,
            query_type="companies.find_all",
        )

    async def get(self, handle: str) -> Row | None:
        """Fetch one company by handle."""
        return await self._fetch_one(
            f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
            [handle],
            query_type="companies.get",
        )

    async def update(self, handle: str, data: Mapping[str, Any]) -> Row | None:
        """Apply a partial update.

        Args:
            handle: Company handle.
            data: Non-empty mapping of updatable fields to new values.

        Returns:
            The updated row, or ``None`` when no company has this handle.

        Raises:
            InvalidInputError: If ``data`` is empty or holds a non-updatable key.
            DuplicateError: If the new name is already taken.
        """
        self._check_update_fields(data, UPDATABLE_FIELDS)
        fragment = build_update_fragment(data, COMPANY_COLUMN_MAP)
        handle_index = len(fragment.values) + 1

        return await self._write(
            f"""UPDATE companies
                SET {fragment.set_cols}, updated_at = now()
                WHERE handle = ${handle_index}
                RETURNING {COMPANY_COLUMNS}""",
            [*fragment.values, handle],
            query_type="companies.update",
        )

    async def remove(self, handle: str) -> bool:
        """Delete a company and, by cascade, its jobs.

        Returns:
            ``True`` when deleted, ``False`` when not found.
        """
        row = await self._write(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            [handle],
            query_type="companies.remove",
        )
        return row is not None
