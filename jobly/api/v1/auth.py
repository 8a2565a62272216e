"""Token issuance and self-service registration endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from jobly.api.deps import get_user_service
from jobly.schemas.user import TokenRequest, TokenResponse, UserRegister
from jobly.services.user_service import UserService

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def issue_token(
    payload: TokenRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> TokenResponse:
    """Exchange a username and password for a signed token.

    Returns:
        ``{"token": ...}`` on success; 401 for unknown users or bad passwords.
    """
    token = await service.authenticate(payload.username, payload.password)
    return TokenResponse(token=token)


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: UserRegister,
    service: Annotated[UserService, Depends(get_user_service)],
) -> TokenResponse:
    """Register a non-admin user and return a token for them."""
    return TokenResponse(token=await service.register(payload))
