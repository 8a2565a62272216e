"""Job table definition."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from jobly.models.base import TimestampedModel


class Job(TimestampedModel):
    """A job posting belonging to a company."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity_at_most_one"),
        Index("ix_jobs_company_handle", "company_handle"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    salary: Mapped[int | None] = mapped_column(Integer, nullable=True)
    equity: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
    company_handle: Mapped[str] = mapped_column(
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )
