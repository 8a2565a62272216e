"""Integration tests for CompanyRepository against the test database."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.exceptions import DuplicateError, InvalidInputError
from jobly.repositories.company import CompanyRepository
from tests.factories import SeedData

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


@pytest.mark.asyncio
async def test_create_returns_row(db_session: AsyncSession) -> None:
    repo = CompanyRepository(db_session)

    created = await repo.create(NEW_COMPANY)

    assert created == {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "num_employees": 1,
        "logo_url": "http://new.img",
    }
    assert await repo.get("new") == created


@pytest.mark.asyncio
async def test_create_duplicate_handle_raises(
    db_session: AsyncSession, seeded: SeedData
) -> None:
    repo = CompanyRepository(db_session)

    with pytest.raises(DuplicateError):
        await repo.create({**NEW_COMPANY, "handle": "c1"})

    assert await repo.get("c1") is not None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("criteria", "expected"),
    [
        ({}, ["c1", "c2", "c3"]),
        ({"nameLike": "1"}, ["c1"]),
        ({"nameLike": "C"}, ["c1", "c2", "c3"]),
        ({"minEmployees": 2}, ["c2", "c3"]),
        ({"maxEmployees": 2}, ["c1", "c2"]),
        ({"minEmployees": 0, "maxEmployees": 1}, ["c1"]),
        ({"nameLike": "nope"}, []),
    ],
)
async def test_find_all_filters(
    db_session: AsyncSession,
    seeded: SeedData,
    criteria: dict,
    expected: list[str],
) -> None:
    rows = await CompanyRepository(db_session).find_all(criteria)

    assert [row["handle"] for row in rows] == expected


@pytest.mark.asyncio
async def test_get_returns_none_when_missing(db_session: AsyncSession) -> None:
    assert await CompanyRepository(db_session).get("nope") is None


@pytest.mark.asyncio
async def test_update_writes_mapped_columns(
    db_session: AsyncSession, seeded: SeedData
) -> None:
    repo = CompanyRepository(db_session)

    updated = await repo.update("c1", {"name": "New", "numEmployees": 10, "logoUrl": None})

    assert updated == {
        "handle": "c1",
        "name": "New",
        "description": "Desc1",
        "num_employees": 10,
        "logo_url": None,
    }


@pytest.mark.asyncio
async def test_update_missing_company_returns_none(db_session: AsyncSession) -> None:
    assert await CompanyRepository(db_session).update("nope", {"name": "x"}) is None


@pytest.mark.asyncio
async def test_update_rejects_empty_and_protected_fields(
    db_session: AsyncSession, seeded: SeedData
) -> None:
    repo = CompanyRepository(db_session)

    with pytest.raises(InvalidInputError, match="No data"):
        await repo.update("c1", {})
    with pytest.raises(InvalidInputError, match="handle"):
        await repo.update("c1", {"handle": "other"})


@pytest.mark.asyncio
async def test_remove_cascades_to_jobs(
    db_session: AsyncSession, seeded: SeedData
) -> None:
    repo = CompanyRepository(db_session)

    assert await repo.remove("c1") is True
    assert await repo.remove("c1") is False
    assert await repo.get("c1") is None
