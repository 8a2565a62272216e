"""Business logic service for company operations."""

from __future__ import annotations

from loguru import logger

from jobly.core.exceptions import DuplicateError, InvalidInputError, NotFoundError
from jobly.repositories.company import CompanyRepository
from jobly.repositories.job import JobRepository
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyResponse,
    CompanySearch,
    CompanyUpdate,
)
from jobly.schemas.job import JobResponse


class CompanyService:
    """Service layer for company business rules and repository orchestration."""

    def __init__(self, repo: CompanyRepository, job_repo: JobRepository):
        """Initialize CompanyService.

        Args:
            repo: Repository used for company persistence.
            job_repo: Repository used to load a company's jobs.
        """
        self.repo = repo
        self.job_repo = job_repo

    async def create_company(self, payload: CompanyCreate) -> CompanyResponse:
        """Create a company.

        Raises:
            InvalidInputError: If the handle or name is already taken.
        """
        log = logger.bind(
            service=self.__class__.__name__,
            operation="create_company",
            handle=payload.handle,
        )
        try:
            row = await self.repo.create(payload.model_dump(by_alias=True))
        except DuplicateError as exc:
            log.warning("Duplicate company on create")
            raise InvalidInputError(f"Duplicate company: {payload.handle}") from exc

        log.info("Created company")
        return CompanyResponse.model_validate(row)

    async def list_companies(self, search: CompanySearch) -> list[CompanyResponse]:
        """List companies matching the search filters, ordered by name.

        Raises:
            InvalidInputError: If ``minEmployees`` exceeds ``maxEmployees``.
        """
        if (
            search.min_employees is not None
            and search.max_employees is not None
            and search.min_employees > search.max_employees
        ):
            raise InvalidInputError("minEmployees must be less than maxEmployees.")

        rows = await self.repo.find_all(search.to_criteria())
        logger.bind(
            service=self.__class__.__name__, operation="list_companies", count=len(rows)
        ).debug("Listed companies")
        return [CompanyResponse.model_validate(row) for row in rows]

    async def get_company(self, handle: str) -> CompanyDetailResponse:
        """Get one company together with its jobs.

        Raises:
            NotFoundError: If no company has this handle.
        """
        row = await self.repo.get(handle)
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        jobs = await self.job_repo.find_all({"companyHandle": handle})
        return CompanyDetailResponse.model_validate(
            {**row, "jobs": [JobResponse.model_validate(job) for job in jobs]}
        )

    async def update_company(
        self, handle: str, payload: CompanyUpdate
    ) -> CompanyResponse:
        """Apply a partial update to a company.

        Only fields present in the request body are written.

        Raises:
            InvalidInputError: If no fields are given or the name is taken.
            NotFoundError: If no company has this handle.
        """
        log = logger.bind(
            service=self.__class__.__name__, operation="update_company", handle=handle
        )
        data = payload.model_dump(by_alias=True, exclude_unset=True)
        try:
            row = await self.repo.update(handle, data)
        except DuplicateError as exc:
            log.warning("Duplicate company name on update")
            raise InvalidInputError(f"Duplicate company name: {data.get('name')}") from exc

        if row is None:
            raise NotFoundError(f"No company: {handle}")

        log.info("Updated company")
        return CompanyResponse.model_validate(row)

    async def delete_company(self, handle: str) -> None:
        """Delete a company and its jobs.

        Raises:
            NotFoundError: If no company has this handle.
        """
        if not await self.repo.remove(handle):
            raise NotFoundError(f"No company: {handle}")
        logger.bind(
            service=self.__class__.__name__, operation="delete_company", handle=handle
        ).info("Deleted company")
