"""Integration tests for job endpoints against the test database."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.clients import API, auth_header
from tests.factories import SeedData

ADMIN = auth_header("u1", is_admin=True)


class TestJobsAPI:
    """Covers job endpoint integration behavior."""

    @pytest.mark.asyncio
    async def test_create_job(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/jobs",
            json={"title": "New", "salary": 10, "equity": 0.2, "companyHandle": "c1"},
            headers=ADMIN,
        )

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert job["equity"] == pytest.approx(0.2)
        assert job["companyHandle"] == "c1"

    @pytest.mark.asyncio
    async def test_create_job_for_unknown_company(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/jobs",
            json={"title": "New", "companyHandle": "nope"},
            headers=ADMIN,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_job_rejects_equity_above_one(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/jobs",
            json={"title": "New", "equity": 1.5, "companyHandle": "c1"},
            headers=ADMIN,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_with_combined_filters(self, client: AsyncClient) -> None:
        response = await client.get(
            f"{API}/jobs", params={"minSalary": 500, "hasEquity": "false"}
        )

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["another1"]

    @pytest.mark.asyncio
    async def test_get_update_delete(self, client: AsyncClient, seeded: SeedData) -> None:
        job_id = seeded.job_ids["testJob1"]

        fetched = await client.get(f"{API}/jobs/{job_id}")
        updated = await client.patch(
            f"{API}/jobs/{job_id}", json={"salary": 200}, headers=ADMIN
        )
        deleted = await client.delete(f"{API}/jobs/{job_id}", headers=ADMIN)
        missing = await client.get(f"{API}/jobs/{job_id}")

        assert fetched.json()["job"]["title"] == "testJob1"
        assert updated.json()["job"]["salary"] == 200
        assert deleted.json() == {"deleted": job_id}
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_update_rejects_company_handle(
        self, client: AsyncClient, seeded: SeedData
    ) -> None:
        response = await client.patch(
            f"{API}/jobs/{seeded.job_ids['testJob1']}",
            json={"companyHandle": "c2"},
            headers=ADMIN,
        )

        assert response.status_code == 400
