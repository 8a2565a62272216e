"""Business logic service for job operations."""

from __future__ import annotations

from loguru import logger

from jobly.core.exceptions import NotFoundError
from jobly.repositories.job import JobRepository
from jobly.schemas.job import JobCreate, JobResponse, JobSearch, JobUpdate


class JobService:
    """Service layer for job business rules and repository orchestration."""

    def __init__(self, repo: JobRepository):
        """Initialize JobService.

        Args:
            repo: Repository used for job persistence operations.
        """
        self.repo = repo

    async def create_job(self, payload: JobCreate) -> JobResponse:
        """Create a job posting for an existing company.

        Raises:
            InvalidInputError: If the company handle does not exist.
        """
        row = await self.repo.create(payload.model_dump(by_alias=True))
        logger.bind(
            service=self.__class__.__name__,
            operation="create_job",
            job_id=row["id"],
            company_handle=payload.company_handle,
        ).info("Created job")
        return JobResponse.model_validate(row)

    async def list_jobs(self, search: JobSearch) -> list[JobResponse]:
        """List jobs matching the search filters, ordered by id."""
        rows = await self.repo.find_all(search.to_criteria())
        return [JobResponse.model_validate(row) for row in rows]

    async def get_job(self, job_id: int) -> JobResponse:
        """Get one job by identifier.

        Raises:
            NotFoundError: If the job does not exist.
        """
        row = await self.repo.get(job_id)
        if row is None:
            logger.bind(
                service=self.__class__.__name__, operation="get_job", job_id=job_id
            ).warning("Job not found")
            raise NotFoundError(f"No job: {job_id}")
        return JobResponse.model_validate(row)

    async def update_job(self, job_id: int, payload: JobUpdate) -> JobResponse:
        """Apply a partial update to a job.

        Raises:
            InvalidInputError: If no updatable fields are given.
            NotFoundError: If the job does not exist.
        """
        row = await self.repo.update(
            job_id, payload.model_dump(by_alias=True, exclude_unset=True)
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        logger.bind(
            service=self.__class__.__name__, operation="update_job", job_id=job_id
        ).info("Updated job")
        return JobResponse.model_validate(row)

    async def delete_job(self, job_id: int) -> None:
        """Delete a job.

        Raises:
            NotFoundError: If the job does not exist.
        """
        if not await self.repo.remove(job_id):
            raise NotFoundError(f"No job: {job_id}")
        logger.bind(
            service=self.__class__.__name__, operation="delete_job", job_id=job_id
        ).info("Deleted job")
