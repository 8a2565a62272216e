"""Database metadata with every model registered for migrations."""

from jobly.models import Company, Job, User  # noqa: F401
from jobly.models.base import Base

__all__ = ["Base"]
