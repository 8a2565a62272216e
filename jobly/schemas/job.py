"""Pydantic schemas for job create, update, search and response payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationInfo, field_validator

from jobly.core.sql import TriState
from jobly.schemas.common import CamelInput, CamelModel, require_not_null


class JobCreate(CamelInput):
    """Schema for creating a job posting."""

    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(CamelInput):
    """Schema for patching a job; ``id`` and ``companyHandle`` are not updatable."""

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        return require_not_null(value, info.field_name)


class JobSearch(CamelInput):
    """Query-string filters for listing jobs."""

    title: str | None = Field(default=None, min_length=1)
    min_salary: int | None = Field(default=None, ge=0)
    has_equity: Literal["true", "false"] | None = None
    company_handle: str | None = Field(default=None, min_length=1)

    def to_criteria(self) -> dict[str, Any]:
        """Return the search criteria keyed by their external names.

        ``hasEquity`` is decoded to :class:`TriState` here so nothing
        downstream compares flag strings.
        """
        criteria = self.model_dump(by_alias=True, exclude_none=True)
        criteria["hasEquity"] = TriState.parse(self.has_equity)
        return criteria


class JobResponse(CamelModel):
    """Schema returned for persisted jobs."""

    id: int
    title: str
    salary: int | None
    equity: float | None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListEnvelope(CamelModel):
    jobs: list[JobResponse]


class JobDeleted(CamelModel):
    deleted: int


__all__ = [
    "JobCreate",
    "JobDeleted",
    "JobEnvelope",
    "JobListEnvelope",
    "JobResponse",
    "JobSearch",
    "JobUpdate",
]
