"""Shared FastAPI dependency helpers for API routes."""

from typing import Any, AsyncGenerator, Iterable, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.auth import (
    Principal,
    RequestContext,
    Stage,
    require_admin,
    require_admin_or_self,
    require_login,
)
from jobly.core.exceptions import InvalidInputError, UnauthorizedError
from jobly.core.health import HealthService
from jobly.core.metrics import increment_authorization_denials
from jobly.core.security import SecurityConfig
from jobly.db.session import engine, get_session
from jobly.repositories.company import CompanyRepository
from jobly.repositories.job import JobRepository
from jobly.repositories.user import UserRepository
from jobly.schemas.company import CompanySearch
from jobly.schemas.job import JobSearch
from jobly.services.company_service import CompanyService
from jobly.services.job_service import JobService
from jobly.services.user_service import UserService

SearchModel = TypeVar("SearchModel", bound=BaseModel)

_LOCATION_ROOTS = {"body", "query", "path", "header"}


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session dependency.

    Returns:
        Async generator yielding one database session.
    """
    async for session in get_session():
        yield session


def get_request_id(request: Request) -> str:
    """Get request id from request context.

    Args:
        request: Incoming FastAPI request object.

    Returns:
        Request id string when available, otherwise ``"unknown"``.
    """
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return "unknown"


def get_security_config(request: Request) -> SecurityConfig:
    """Return the security configuration fixed at application start."""
    return request.app.state.security


def get_principal(request: Request) -> Principal | None:
    """Return the principal attached by the token-decoding middleware."""
    return getattr(request.state, "principal", None)


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """Flatten pydantic error records into ``"field: message"`` strings."""
    messages: list[str] = []
    for error in errors:
        field = ".".join(
            str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS
        )
        message = error.get("msg", "invalid value")
        messages.append(f"{field}: {message}" if field else message)
    return messages


class AuthorizationStage:
    """Adapt an authorization stage to a FastAPI route dependency.

    The request context is built from the principal already attached to
    ``request.state`` and the resolved path parameters.
    """

    def __init__(self, stage: Stage, name: str):
        self.stage = stage
        self.name = name

    def __call__(self, request: Request) -> Principal | None:
        context = RequestContext(
            authorization=request.headers.get("authorization"),
            path_params=dict(request.path_params),
            principal=get_principal(request),
        )
        try:
            context = self.stage(context)
        except UnauthorizedError:
            increment_authorization_denials(self.name)
            raise
        return context.principal


RequireLogin = AuthorizationStage(require_login, "require_login")
RequireAdmin = AuthorizationStage(require_admin, "require_admin")
RequireAdminOrSelf = AuthorizationStage(require_admin_or_self, "require_admin_or_self")


def _parse_query(model: type[SearchModel], request: Request) -> SearchModel:
    try:
        return model.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise InvalidInputError(format_validation_errors(exc.errors())) from exc


def get_company_search(request: Request) -> CompanySearch:
    """Validate company list filters; unknown keys are rejected."""
    return _parse_query(CompanySearch, request)


def get_job_search(request: Request) -> JobSearch:
    """Validate job list filters; unknown keys are rejected."""
    return _parse_query(JobSearch, request)


def get_health_service() -> HealthService:
    """Provide a health service dependency.

    Returns:
        HealthService configured for dependency checks.
    """
    return HealthService(engine)


def get_company_service(db: AsyncSession = Depends(get_db_session)) -> CompanyService:
    """Provide a company service bound to the request session."""
    return CompanyService(CompanyRepository(db), JobRepository(db))


def get_job_service(db: AsyncSession = Depends(get_db_session)) -> JobService:
    """Provide a job service dependency.

    Args:
        db: Active async DB session provided by dependency injection.

    Returns:
        JobService configured with a JobRepository bound to the session.
    """
    return JobService(JobRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    security: SecurityConfig = Depends(get_security_config),
) -> UserService:
    """Provide a user service with hashing and signing configuration."""
    return UserService(UserRepository(db), security)


__all__ = [
    "AuthorizationStage",
    "RequireAdmin",
    "RequireAdminOrSelf",
    "RequireLogin",
    "format_validation_errors",
    "get_company_search",
    "get_company_service",
    "get_db_session",
    "get_health_service",
    "get_job_search",
    "get_job_service",
    "get_principal",
    "get_request_id",
    "get_security_config",
    "get_user_service",
]
