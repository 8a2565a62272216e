"""In-memory async repository stand-ins for service and API tests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jobly.core.exceptions import DuplicateError, InvalidInputError
from jobly.core.sql import TriState
from jobly.repositories.company import COMPANY_COLUMN_MAP
from jobly.repositories.company import UPDATABLE_FIELDS as COMPANY_FIELDS
from jobly.repositories.job import JOB_COLUMN_MAP
from jobly.repositories.job import UPDATABLE_FIELDS as JOB_FIELDS
from jobly.repositories.user import USER_COLUMN_MAP
from jobly.repositories.user import UPDATABLE_FIELDS as USER_FIELDS

Row = dict[str, Any]


def to_columns(data: Mapping[str, Any], column_map: Mapping[str, str]) -> Row:
    return {column_map.get(key, key): value for key, value in data.items()}


def check_update(data: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise InvalidInputError(
            f"Unknown or protected update field(s): {', '.join(unknown)}"
        )
    if not data:
        raise InvalidInputError("No data")


@dataclass
class FakeCompanyRepository:
    rows: dict[str, Row] = field(default_factory=dict)
    criteria_seen: list[Mapping[str, Any]] = field(default_factory=list)

    async def create(self, data: Mapping[str, Any]) -> Row:
        row = {"num_employees": None, "logo_url": None}
        row.update(to_columns(data, COMPANY_COLUMN_MAP))
        if row["handle"] in self.rows or any(
            existing["name"] == row["name"] for existing in self.rows.values()
        ):
            raise DuplicateError("Duplicate companies record.")
        self.rows[row["handle"]] = row
        return dict(row)

    async def find_all(self, criteria: Mapping[str, Any] | None = None) -> list[Row]:
        criteria = criteria or {}
        self.criteria_seen.append(dict(criteria))
        name_like = criteria.get("nameLike")
        min_employees = criteria.get("minEmployees")
        max_employees = criteria.get("maxEmployees")

        result = []
        for row in sorted(self.rows.values(), key=lambda item: item["name"]):
            employees = row["num_employees"]
            if name_like and name_like.lower() not in row["name"].lower():
                continue
            if min_employees is not None and (
                employees is None or employees < int(min_employees)
            ):
                continue
            if max_employees is not None and (
                employees is None or employees > int(max_employees)
            ):
                continue
            result.append(dict(row))
        return result

    async def get(self, handle: str) -> Row | None:
        row = self.rows.get(handle)
        return dict(row) if row is not None else None

    async def update(self, handle: str, data: Mapping[str, Any]) -> Row | None:
        check_update(data, COMPANY_FIELDS)
        row = self.rows.get(handle)
        if row is None:
            return None
        updates = to_columns(data, COMPANY_COLUMN_MAP)
        if "name" in updates and any(
            other["name"] == updates["name"]
            for key, other in self.rows.items()
            if key != handle
        ):
            raise DuplicateError("Duplicate companies record.")
        row.update(updates)
        return dict(row)

    async def remove(self, handle: str) -> bool:
        return self.rows.pop(handle, None) is not None


@dataclass
class FakeJobRepository:
    companies: FakeCompanyRepository | None = None
    rows: dict[int, Row] = field(default_factory=dict)
    next_id: int = 1

    async def create(self, data: Mapping[str, Any]) -> Row:
        row = {"salary": None, "equity": None}
        row.update(to_columns(data, JOB_COLUMN_MAP))
        if self.companies is not None and row["company_handle"] not in self.companies.rows:
            raise InvalidInputError("Referenced record for jobs does not exist.")
        row["id"] = self.next_id
        self.next_id += 1
        self.rows[row["id"]] = row
        return dict(row)

    async def find_all(self, criteria: Mapping[str, Any] | None = None) -> list[Row]:
        criteria = criteria or {}
        title = criteria.get("title")
        min_salary = criteria.get("minSalary")
        has_equity = TriState.parse(criteria.get("hasEquity"))
        company_handle = criteria.get("companyHandle")

        result = []
        for job_id in sorted(self.rows):
            row = self.rows[job_id]
            equity = row["equity"] or 0
            if title and title.lower() not in row["title"].lower():
                continue
            if min_salary is not None and (row["salary"] or 0) < int(min_salary):
                continue
            if has_equity is TriState.TRUE and not equity > 0:
                continue
            if has_equity is TriState.FALSE and equity != 0:
                continue
            if company_handle is not None and row["company_handle"] != company_handle:
                continue
            result.append(dict(row))
        return result

    async def get(self, job_id: int) -> Row | None:
        row = self.rows.get(job_id)
        return dict(row) if row is not None else None

    async def update(self, job_id: int, data: Mapping[str, Any]) -> Row | None:
        check_update(data, JOB_FIELDS)
        row = self.rows.get(job_id)
        if row is None:
            return None
        row.update(to_columns(data, JOB_COLUMN_MAP))
        return dict(row)

    async def remove(self, job_id: int) -> bool:
        return self.rows.pop(job_id, None) is not None


@dataclass
class FakeUserRepository:
    rows: dict[str, Row] = field(default_factory=dict)

    @staticmethod
    def _public(row: Row) -> Row:
        return {key: value for key, value in row.items() if key != "password"}

    async def create(self, data: Mapping[str, Any]) -> Row:
        row = {"is_admin": False}
        row.update(to_columns(data, USER_COLUMN_MAP))
        if row["username"] in self.rows:
            raise DuplicateError("Duplicate users record.")
        self.rows[row["username"]] = row
        return self._public(row)

    async def find_all(self) -> list[Row]:
        return [self._public(self.rows[name]) for name in sorted(self.rows)]

    async def get(self, username: str) -> Row | None:
        row = self.rows.get(username)
        return self._public(row) if row is not None else None

    async def get_with_password(self, username: str) -> Row | None:
        row = self.rows.get(username)
        return dict(row) if row is not None else None

    async def update(self, username: str, data: Mapping[str, Any]) -> Row | None:
        check_update(data, USER_FIELDS)
        row = self.rows.get(username)
        if row is None:
            return None
        row.update(to_columns(data, USER_COLUMN_MAP))
        return self._public(row)

    async def remove(self, username: str) -> bool:
        return self.rows.pop(username, None) is not None
