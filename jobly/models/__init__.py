"""ORM models package exports."""

from jobly.models.base import Base, TimestampedModel
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User

__all__ = ["Base", "Company", "Job", "TimestampedModel", "User"]
