"""Authorization stages evaluated over a typed per-request context.

Each stage is a callable taking a :class:`RequestContext` and either
returning the context to continue with or raising
:class:`~jobly.core.exceptions.UnauthorizedError`. Stages are framework
agnostic; ``jobly.api.deps`` adapts them to FastAPI dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

import jwt
from loguru import logger

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import SecurityConfig, decode_token

_BEARER_PREFIX = re.compile(r"^bearer ", re.IGNORECASE)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity derived from verified token claims."""

    username: str
    is_admin: bool = False
    claims: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Principal":
        """Build a principal from decoded token claims.

        Raises:
            ValueError: If ``username`` is missing or not a string.
        """
        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise ValueError("token claims lack a username")
        return cls(
            username=username,
            is_admin=claims.get("isAdmin") is True,
            claims=MappingProxyType(dict(claims)),
        )


@dataclass(frozen=True)
class RequestContext:
    """The slice of a request the authorization stages read."""

    authorization: str | None = None
    path_params: Mapping[str, str] = field(default_factory=dict)
    principal: Principal | None = None


Stage = Callable[[RequestContext], RequestContext]


class TokenDecoder:
    """Attach a principal when the ``Authorization`` header holds a valid token.

    Never raises: a missing header or any verification failure yields a
    context without a principal.
    """

    name = "token_decode"

    def __init__(self, config: SecurityConfig):
        self.config = config

    def __call__(self, context: RequestContext) -> RequestContext:
        if not context.authorization:
            return replace(context, principal=None)

        token = _BEARER_PREFIX.sub("", context.authorization.strip()).strip()
        try:
            principal = Principal.from_claims(decode_token(token, self.config))
        except (jwt.PyJWTError, ValueError) as exc:
            logger.bind(stage=self.name, error=str(exc)).debug(
                "Ignoring unverifiable token"
            )
            return replace(context, principal=None)

        return replace(context, principal=principal)


def require_login(context: RequestContext) -> RequestContext:
    """Reject requests without a principal."""
    if context.principal is None:
        raise UnauthorizedError()
    return context


def require_admin(context: RequestContext) -> RequestContext:
    """Reject requests unless the principal is an admin."""
    if context.principal is None:
        raise UnauthorizedError()
    if not context.principal.is_admin:
        raise UnauthorizedError("admin access required.")
    return context


def require_admin_or_self(context: RequestContext) -> RequestContext:
    """Reject requests unless the principal is an admin or the path's user."""
    principal = context.principal
    if principal is None:
        raise UnauthorizedError()
    if principal.is_admin:
        return context
    if principal.username != context.path_params.get("username"):
        raise UnauthorizedError("must be admin or current user.")
    return context


def run_stages(context: RequestContext, stages: Iterable[Stage]) -> RequestContext:
    """Apply stages in order, stopping at the first failure."""
    for stage in stages:
        context = stage(context)
    return context


__all__ = [
    "Principal",
    "RequestContext",
    "Stage",
    "TokenDecoder",
    "require_admin",
    "require_admin_or_self",
    "require_login",
    "run_stages",
]
