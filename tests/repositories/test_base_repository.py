"""Unit tests for placeholder binding and repository create guards."""

from __future__ import annotations

import pytest

from jobly.core.exceptions import RepositoryError
from jobly.repositories.base import bind_positional
from jobly.repositories.company import CompanyRepository
from jobly.repositories.job import JobRepository
from jobly.repositories.user import UserRepository


def test_rewrites_placeholders_as_named_binds() -> None:
    statement, params = bind_positional(
        'UPDATE users SET "first_name"=$1, "email"=$2 WHERE username = $3',
        ["Taco", "t@x.io", "u1"],
    )

    assert str(statement) == (
        'UPDATE users SET "first_name"=:p1, "email"=:p2 WHERE username = :p3'
    )
    assert params == {"p1": "Taco", "p2": "t@x.io", "p3": "u1"}


def test_multi_digit_placeholders() -> None:
    sql = " AND ".join(f"c{index} = ${index}" for index in range(1, 12))

    statement, params = bind_positional(sql, list(range(1, 12)))

    assert "c11 = :p11" in str(statement)
    assert params["p11"] == 11


def test_statement_without_placeholders() -> None:
    statement, params = bind_positional("SELECT 1", [])

    assert str(statement) == "SELECT 1"
    assert params == {}


@pytest.mark.parametrize(
    ("sql", "values"),
    [
        ("SELECT $1", []),
        ("SELECT 1", ["extra"]),
        ("SELECT $1, $3", ["a", "b"]),
    ],
)
def test_rejects_mismatched_values(sql: str, values: list) -> None:
    with pytest.raises(ValueError):
        bind_positional(sql, values)


async def _no_row(*args, **kwargs) -> None:
    return None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("repository_class", "data"),
    [
        (CompanyRepository, {"handle": "c1", "name": "C1", "description": "Desc"}),
        (JobRepository, {"title": "t", "companyHandle": "c1"}),
        (
            UserRepository,
            {
                "username": "u1",
                "password": "hashed",
                "firstName": "U1F",
                "lastName": "U1L",
                "email": "u1@email.com",
                "isAdmin": False,
            },
        ),
    ],
)
async def test_create_without_returned_row_raises(
    monkeypatch: pytest.MonkeyPatch, repository_class: type, data: dict
) -> None:
    repository = repository_class(db=None)
    monkeypatch.setattr(repository, "_write", _no_row)

    with pytest.raises(RepositoryError, match="Failed to create"):
        await repository.create(data)
