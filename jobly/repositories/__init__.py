"""Repository package exports."""

from jobly.repositories.base import BaseRepository, bind_positional
from jobly.repositories.company import CompanyRepository
from jobly.repositories.job import JobRepository
from jobly.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "JobRepository",
    "UserRepository",
    "bind_positional",
]
