"""Shared pydantic configuration and validators for API payloads."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

# bcrypt only considers the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelInput(CamelModel):
    """Request payload that rejects unknown keys."""

    model_config = ConfigDict(extra="forbid")


def require_not_null(value: Any, field_name: str) -> Any:
    """Reject an explicit ``null`` for a column that cannot hold one."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def check_http_url(value: str) -> str:
    """Validate ``value`` as an ``AnyHttpUrl`` and keep it as sent.

    The stored value is the caller's string, not pydantic's normalised URL.
    """
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as exc:
        raise ValueError("must be an http(s) URL") from exc
    return value


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes when UTF-8 encoded"
        )
    return value


def validate_email(value: str | None) -> str | None:
    """Minimal shape check: a local part, ``@`` and a dotted domain."""
    if value is None:
        return value
    local, _, domain = value.partition("@")
    if not local or "." not in domain or domain.startswith("."):
        raise ValueError("must be a valid email address")
    return value


HttpUrlStr = Annotated[str, AfterValidator(check_http_url)]
EmailAddress = Annotated[str, AfterValidator(validate_email)]


__all__ = [
    "BCRYPT_MAX_PASSWORD_BYTES",
    "CamelInput",
    "CamelModel",
    "EmailAddress",
    "HttpUrlStr",
    "check_http_url",
    "check_password_bytes",
    "require_not_null",
    "validate_email",
]
