"""Create companies, users and jobs tables

Revision ID: 202610170900
Revises:
Create Date: 2026-10-17 09:00:00
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "202610170900"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create the three tables; jobs cascade with their company."""
    op.create_table(
        "companies",
        sa.Column("handle", sa.String(length=25), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("num_employees", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "num_employees >= 0", name="ck_companies_num_employees_non_negative"
        ),
        sa.PrimaryKeyConstraint("handle"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("username", sa.String(length=25), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column(
            "is_admin",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamps(),
        sa.CheckConstraint("position('@' IN email) > 1", name="ck_users_email_has_at"),
        sa.PrimaryKeyConstraint("username"),
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=True),
        sa.Column("equity", sa.Numeric(), nullable=True),
        sa.Column("company_handle", sa.String(length=25), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
        sa.CheckConstraint("equity <= 1.0", name="ck_jobs_equity_at_most_one"),
        sa.ForeignKeyConstraint(
            ["company_handle"], ["companies.handle"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_jobs_company_handle", "jobs", ["company_handle"], unique=False)


def downgrade() -> None:
    """Drop jobs, users and companies."""
    op.drop_index("ix_jobs_company_handle", table_name="jobs")
    op.drop_table("jobs")
    op.drop_table("users")
    op.drop_table("companies")
