"""Jobs API endpoints for CRUD operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from jobly.api.deps import RequireAdmin, get_job_search, get_job_service
from jobly.schemas.job import (
    JobCreate,
    JobDeleted,
    JobEnvelope,
    JobListEnvelope,
    JobSearch,
    JobUpdate,
)
from jobly.services.job_service import JobService

router = APIRouter()

JobServiceDep = Annotated[JobService, Depends(get_job_service)]


@router.post(
    "",
    response_model=JobEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(RequireAdmin)],
)
async def create_job(payload: JobCreate, service: JobServiceDep) -> JobEnvelope:
    """Create a job for an existing company. Admin only.

    Args:
        payload: Job create request payload.
        service: Job service dependency.

    Returns:
        Created job wrapped in a ``job`` envelope.
    """
    return JobEnvelope(job=await service.create_job(payload))


@router.get("", response_model=JobListEnvelope)
async def list_jobs(
    search: Annotated[JobSearch, Depends(get_job_search)],
    service: JobServiceDep,
) -> JobListEnvelope:
    """List jobs filtered by ``title``, ``minSalary``, ``hasEquity`` and ``companyHandle``."""
    return JobListEnvelope(jobs=await service.list_jobs(search))


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(job_id: int, service: JobServiceDep) -> JobEnvelope:
    return JobEnvelope(job=await service.get_job(job_id))


@router.patch(
    "/{job_id}",
    response_model=JobEnvelope,
    dependencies=[Depends(RequireAdmin)],
)
async def update_job(
    job_id: int, payload: JobUpdate, service: JobServiceDep
) -> JobEnvelope:
    """Partially update a job. Admin only; ``id`` and ``companyHandle`` are fixed."""
    return JobEnvelope(job=await service.update_job(job_id, payload))


@router.delete(
    "/{job_id}",
    response_model=JobDeleted,
    dependencies=[Depends(RequireAdmin)],
)
async def delete_job(job_id: int, service: JobServiceDep) -> JobDeleted:
    """Delete a job. Admin only."""
    await service.delete_job(job_id)
    return JobDeleted(deleted=job_id)
