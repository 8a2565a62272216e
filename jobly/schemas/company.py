"""Pydantic schemas for company create, update, search and response payloads."""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from jobly.schemas.common import (
    CamelInput,
    CamelModel,
    HttpUrlStr,
    require_not_null,
)
from jobly.schemas.job import JobResponse


class CompanyCreate(CamelInput):
    """Schema for creating a company."""

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: HttpUrlStr | None = None


class CompanyUpdate(CamelInput):
    """Schema for patching a company; ``handle`` is not updatable."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: HttpUrlStr | None = None

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        return require_not_null(value, info.field_name)


class CompanySearch(CamelInput):
    """Query-string filters for listing companies."""

    name_like: str | None = Field(default=None, min_length=1)
    min_employees: int | None = Field(default=None, ge=0)
    max_employees: int | None = Field(default=None, ge=0)

    def to_criteria(self) -> dict[str, Any]:
        """Return the search criteria keyed by their external names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CompanyResponse(CamelModel):
    """Schema returned for persisted companies."""

    handle: str
    name: str
    description: str
    num_employees: int | None
    logo_url: str | None


class CompanyDetailResponse(CompanyResponse):
    """Company with its job postings."""

    jobs: list[JobResponse] = Field(default_factory=list)


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(CamelModel):
    companies: list[CompanyResponse]


class CompanyDeleted(CamelModel):
    deleted: str


__all__ = [
    "CompanyCreate",
    "CompanyDeleted",
    "CompanyDetailEnvelope",
    "CompanyDetailResponse",
    "CompanyEnvelope",
    "CompanyListEnvelope",
    "CompanyResponse",
    "CompanySearch",
    "CompanyUpdate",
]
