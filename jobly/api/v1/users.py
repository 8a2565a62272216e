"""User account API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from jobly.api.deps import RequireAdmin, RequireAdminOrSelf, get_user_service
from jobly.schemas.user import (
    UserCreate,
    UserCreatedEnvelope,
    UserDeleted,
    UserEnvelope,
    UserListEnvelope,
    UserUpdate,
)
from jobly.services.user_service import UserService

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post(
    "",
    response_model=UserCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(RequireAdmin)],
)
async def create_user(
    payload: UserCreate, service: UserServiceDep
) -> UserCreatedEnvelope:
    """Create a user, optionally an admin, and return a token for them.

    Admin only. Self-service signup goes through ``/auth/register``.
    """
    user, token = await service.create_user(payload)
    return UserCreatedEnvelope(user=user, token=token)


@router.get(
    "",
    response_model=UserListEnvelope,
    dependencies=[Depends(RequireAdmin)],
)
async def list_users(service: UserServiceDep) -> UserListEnvelope:
    return UserListEnvelope(users=await service.list_users())


@router.get(
    "/{username}",
    response_model=UserEnvelope,
    dependencies=[Depends(RequireAdminOrSelf)],
)
async def get_user(username: str, service: UserServiceDep) -> UserEnvelope:
    return UserEnvelope(user=await service.get_user(username))


@router.patch(
    "/{username}",
    response_model=UserEnvelope,
    dependencies=[Depends(RequireAdminOrSelf)],
)
async def update_user(
    username: str, payload: UserUpdate, service: UserServiceDep
) -> UserEnvelope:
    """Partially update a user. A new password is hashed before storage."""
    return UserEnvelope(user=await service.update_user(username, payload))


@router.delete(
    "/{username}",
    response_model=UserDeleted,
    dependencies=[Depends(RequireAdminOrSelf)],
)
async def delete_user(username: str, service: UserServiceDep) -> UserDeleted:
    await service.delete_user(username)
    return UserDeleted(deleted=username)
