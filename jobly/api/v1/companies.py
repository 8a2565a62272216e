"""Company API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from jobly.api.deps import RequireAdmin, get_company_search, get_company_service
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDeleted,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanySearch,
    CompanyUpdate,
)
from jobly.services.company_service import CompanyService

router = APIRouter()

CompanyServiceDep = Annotated[CompanyService, Depends(get_company_service)]


@router.post(
    "",
    response_model=CompanyEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(RequireAdmin)],
)
async def create_company(
    payload: CompanyCreate, service: CompanyServiceDep
) -> CompanyEnvelope:
    """Create a company. Admin only."""
    return CompanyEnvelope(company=await service.create_company(payload))


@router.get("", response_model=CompanyListEnvelope)
async def list_companies(
    search: Annotated[CompanySearch, Depends(get_company_search)],
    service: CompanyServiceDep,
) -> CompanyListEnvelope:
    """List companies filtered by ``nameLike``, ``minEmployees`` and ``maxEmployees``.

    Args:
        search: Validated query-string filters.
        service: Company service dependency.

    Returns:
        Companies ordered by name.
    """
    return CompanyListEnvelope(companies=await service.list_companies(search))


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(handle: str, service: CompanyServiceDep) -> CompanyDetailEnvelope:
    """Get one company with its jobs."""
    return CompanyDetailEnvelope(company=await service.get_company(handle))


@router.patch(
    "/{handle}",
    response_model=CompanyEnvelope,
    dependencies=[Depends(RequireAdmin)],
)
async def update_company(
    handle: str, payload: CompanyUpdate, service: CompanyServiceDep
) -> CompanyEnvelope:
    """Partially update a company. Admin only; the handle cannot change."""
    return CompanyEnvelope(company=await service.update_company(handle, payload))


@router.delete(
    "/{handle}",
    response_model=CompanyDeleted,
    dependencies=[Depends(RequireAdmin)],
)
async def delete_company(handle: str, service: CompanyServiceDep) -> CompanyDeleted:
    await service.delete_company(handle)
    return CompanyDeleted(deleted=handle)
