"""Data access repository for users."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from jobly.core.exceptions import RepositoryError
from jobly.core.sql import build_update_fragment
from jobly.repositories.base import BaseRepository, Row

USER_COLUMNS = "username, first_name, last_name, email, is_admin"

USER_COLUMN_MAP: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

UPDATABLE_FIELDS = frozenset({"password", "firstName", "lastName", "email"})


class UserRepository(BaseRepository):
    """Repository responsible for the ``users`` table.

    Passwords arrive here already hashed; rows returned by this repository
    never carry the hash except through :meth:`get_with_password`.
    """

    table = "users"

    async def create(self, data: Mapping[str, Any]) -> Row:
        """Insert a user.

        Raises:
            DuplicateError: If the username already exists.
            RepositoryError: If the insert fails.
        """
        logger.bind(
            repository=self.__class__.__name__, username=data["username"]
        ).info("Creating user")
        row = await self._write(
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_COLUMNS}""",
            [
                data["username"],
                data["password"],
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
            query_type="users.create",
        )
        if row is None:
            raise RepositoryError("Failed to create user")
        return row

    async def find_all(self) -> list[Row]:
        """Fetch every user ordered by username."""
        return await self._fetch_all(
            f"SELECT {USER_COLUMNS} FROM users ORDER BY username",
            query_type="users.find_all",
        )

    async def get(self, username: str) -> Row | None:
        return await self._fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE username = $1",
            [username],
            query_type="users.get",
        )

    async def get_with_password(self, username: str) -> Row | None:
        """Fetch a user including the stored password hash, for authentication."""
        return await self._fetch_one(
            f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
            [username],
            query_type="users.get_with_password",
        )

    async def update(self, username: str, data: Mapping[str, Any]) -> Row | None:
        """Apply a partial update.

        Returns:
            The updated row, or ``None`` when no user has this username.

        Raises:
            InvalidInputError: If ``data`` is empty or holds a non-updatable key.
        """
        self._check_update_fields(data, UPDATABLE_FIELDS)
        fragment = build_update_fragment(data, USER_COLUMN_MAP)
        username_index = len(fragment.values) + 1

        return await self._write(
            f"""UPDATE users
                SET {fragment.set_cols}, updated_at = now()
                WHERE username = ${username_index}
                RETURNING {USER_COLUMNS}""",
            [*fragment.values, username],
            query_type="users.update",
        )

    async def remove(self, username: str) -> bool:
        row = await self._write(
            "DELETE FROM users WHERE username = $1 RETURNING username",
            [username],
            query_type="users.remove",
        )
        return row is not None
