"""Business logic service for users, registration and authentication."""

from __future__ import annotations

from typing import Any

from loguru import logger

from jobly.core.exceptions import (
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from jobly.core.security import (
    SecurityConfig,
    create_token,
    hash_password,
    verify_password,
)
from jobly.repositories.user import UserRepository
from jobly.schemas.user import UserCreate, UserRegister, UserResponse, UserUpdate


class UserService:
    """Service layer for user accounts and token issuance."""

    def __init__(self, repo: UserRepository, security: SecurityConfig):
        """Initialize UserService.

        Args:
            repo: Repository used for user persistence.
            security: Signing and hashing configuration.
        """
        self.repo = repo
        self.security = security

    async def authenticate(self, username: str, password: str) -> str:
        """Exchange credentials for a signed token.

        Raises:
            UnauthorizedError: If the user is unknown or the password is wrong.
        """
        log = logger.bind(
            service=self.__class__.__name__, operation="authenticate", username=username
        )
        row = await self.repo.get_with_password(username)
        if row is None or not verify_password(password, row["password"]):
            log.warning("Rejected credentials")
            raise UnauthorizedError("Invalid username/password")

        log.info("Issued token")
        return create_token(row["username"], row["is_admin"], self.security)

    async def register(self, payload: UserRegister) -> str:
        """Create a non-admin user and return a token for them."""
        user = await self._create(payload.model_dump(by_alias=True), is_admin=False)
        return create_token(user.username, user.is_admin, self.security)

    async def create_user(self, payload: UserCreate) -> tuple[UserResponse, str]:
        """Create a user, possibly an admin, returning it with a token."""
        data = payload.model_dump(by_alias=True)
        user = await self._create(data, is_admin=data.pop("isAdmin"))
        return user, create_token(user.username, user.is_admin, self.security)

    async def list_users(self) -> list[UserResponse]:
        rows = await self.repo.find_all()
        return [UserResponse.model_validate(row) for row in rows]

    async def get_user(self, username: str) -> UserResponse:
        """Get one user.

        Raises:
            NotFoundError: If no user has this username.
        """
        row = await self.repo.get(username)
        if row is None:
            raise NotFoundError(f"No user: {username}")
        return UserResponse.model_validate(row)

    async def update_user(self, username: str, payload: UserUpdate) -> UserResponse:
        """Apply a partial update; a new password is hashed before storage.

        Raises:
            InvalidInputError: If no updatable fields are given.
            NotFoundError: If no user has this username.
        """
        data = payload.model_dump(by_alias=True, exclude_unset=True)
        if "password" in data:
            data["password"] = hash_password(data["password"], self.security)

        row = await self.repo.update(username, data)
        if row is None:
            raise NotFoundError(f"No user: {username}")

        logger.bind(
            service=self.__class__.__name__,
            operation="update_user",
            username=username,
            fields=sorted(data),
        ).info("Updated user")
        return UserResponse.model_validate(row)

    async def delete_user(self, username: str) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If no user has this username.
        """
        if not await self.repo.remove(username):
            raise NotFoundError(f"No user: {username}")
        logger.bind(
            service=self.__class__.__name__, operation="delete_user", username=username
        ).info("Deleted user")

    async def _create(self, data: dict[str, Any], *, is_admin: bool) -> UserResponse:
        username = data["username"]
        record = {
            **data,
            "password": hash_password(data["password"], self.security),
            "isAdmin": is_admin,
        }
        try:
            row = await self.repo.create(record)
        except DuplicateError as exc:
            logger.bind(
                service=self.__class__.__name__, operation="create_user", username=username
            ).warning("Duplicate username")
            raise InvalidInputError(f"Duplicate username: {username}") from exc

        logger.bind(
            service=self.__class__.__name__,
            operation="create_user",
            username=username,
            is_admin=is_admin,
        ).info("Created user")
        return UserResponse.model_validate(row)
