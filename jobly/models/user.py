"""User table definition."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from jobly.models.base import TimestampedModel


class User(TimestampedModel):
    """A registered user; ``password`` holds a bcrypt hash."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("position('@' IN email) > 1", name="ck_users_email_has_at"),
    )

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
