"""Query validation, error envelopes and request ids, over in-memory repositories."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.clients import API, auth_header

ADMIN = auth_header("u1", is_admin=True)


@pytest.mark.asyncio
async def test_company_list_is_public_and_ordered(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/companies")

    assert response.status_code == 200
    assert [company["handle"] for company in response.json()["companies"]] == [
        "c1",
        "c2",
        "c3",
    ]
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_company_search_filters(fake_client: AsyncClient) -> None:
    response = await fake_client.get(
        f"{API}/companies", params={"nameLike": "c", "minEmployees": 2, "maxEmployees": 2}
    )

    assert [company["handle"] for company in response.json()["companies"]] == ["c2"]


@pytest.mark.asyncio
async def test_inverted_employee_range_is_bad_request(fake_client: AsyncClient) -> None:
    response = await fake_client.get(
        f"{API}/companies", params={"minEmployees": 3, "maxEmployees": 1}
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": {
            "message": "minEmployees must be less than maxEmployees.",
            "status": 400,
        }
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"color": "red"}, {"minEmployees": -1}, {"maxEmployees": "many"}],
)
async def test_invalid_company_filters_are_bad_request(
    fake_client: AsyncClient, params: dict
) -> None:
    response = await fake_client.get(f"{API}/companies", params=params)

    assert response.status_code == 400
    assert isinstance(response.json()["error"]["message"], list)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("has_equity", "expected"),
    [("true", ["testJob2"]), ("false", ["testJob1", "another1"])],
)
async def test_job_equity_flag(
    fake_client: AsyncClient, has_equity: str, expected: list[str]
) -> None:
    response = await fake_client.get(f"{API}/jobs", params={"hasEquity": has_equity})

    assert response.status_code == 200
    assert [job["title"] for job in response.json()["jobs"]] == expected


@pytest.mark.asyncio
async def test_job_equity_flag_must_be_true_or_false(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/jobs", params={"hasEquity": "yes"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_non_integer_job_id_is_bad_request(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/jobs/abc")

    assert response.status_code == 400
    assert response.json()["error"]["status"] == 400


@pytest.mark.asyncio
async def test_missing_job_is_not_found(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/jobs/999")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "No job: 999", "status": 404}}


@pytest.mark.asyncio
async def test_company_handle_is_not_updatable(fake_client: AsyncClient) -> None:
    response = await fake_client.patch(
        f"{API}/companies/c1", json={"handle": "c1-new"}, headers=ADMIN
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_empty_update_is_bad_request(fake_client: AsyncClient) -> None:
    response = await fake_client.patch(f"{API}/companies/c1", json={}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "No data", "status": 400}}


@pytest.mark.asyncio
async def test_null_for_required_column_is_bad_request(fake_client: AsyncClient) -> None:
    response = await fake_client.patch(
        f"{API}/companies/c1", json={"name": None}, headers=ADMIN
    )

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("logo_url", ["not-a-url", "ftp://c1.img/logo.png", "http://"])
async def test_non_http_logo_url_is_bad_request(
    fake_client: AsyncClient, logo_url: str
) -> None:
    response = await fake_client.patch(
        f"{API}/companies/c1", json={"logoUrl": logo_url}, headers=ADMIN
    )

    assert response.status_code == 400
    messages = response.json()["error"]["message"]
    assert any("logo" in message.lower() for message in messages)


@pytest.mark.asyncio
async def test_logo_url_is_stored_as_sent(fake_client: AsyncClient) -> None:
    response = await fake_client.patch(
        f"{API}/companies/c1", json={"logoUrl": "https://c1.img"}, headers=ADMIN
    )

    assert response.status_code == 200
    assert response.json()["company"]["logoUrl"] == "https://c1.img"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


@pytest.mark.asyncio
async def test_company_detail_includes_jobs(fake_client: AsyncClient) -> None:
    response = await fake_client.get(f"{API}/companies/c2")

    assert response.status_code == 200
    company = response.json()["company"]
    assert company["numEmployees"] == 2
    assert company["jobs"] == [
        {
            "id": 2,
            "title": "testJob2",
            "salary": 1000,
            "equity": 0.1,
            "companyHandle": "c2",
        }
    ]
