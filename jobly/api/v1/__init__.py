"""Version 1 API routers."""

from jobly.api.v1.auth import router as auth_router
from jobly.api.v1.companies import router as companies_router
from jobly.api.v1.health import router as health_router
from jobly.api.v1.jobs import router as jobs_router
from jobly.api.v1.users import router as users_router

__all__ = [
    "auth_router",
    "companies_router",
    "health_router",
    "jobs_router",
    "users_router",
]
