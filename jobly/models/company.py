"""Company table definition."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobly.models.base import TimestampedModel


class Company(TimestampedModel):
    """A hiring company, keyed by its short handle."""

    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint(
            "num_employees >= 0", name="ck_companies_num_employees_non_negative"
        ),
    )

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    num_employees: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
