"""FastAPI application setup for the Jobly API."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly.api import api_router
from jobly.api.deps import format_validation_errors
from jobly.api.deps import get_request_id as _get_request_id
from jobly.core.auth import RequestContext, TokenDecoder
from jobly.core.config import settings
from jobly.core.exceptions import ErrorMessage, JoblyError
from jobly.core.logging import setup_logging
from jobly.core.security import SecurityConfig

setup_logging(
    settings.LOG_LEVEL,
    debug=settings.DEBUG,
    log_dir=Path(settings.LOG_DIR) if settings.LOG_DIR else None,
)


def error_response(status_code: int, message: ErrorMessage, **kwargs: Any) -> JSONResponse:
    """Render the ``{"error": {"message", "status"}}`` body used by every failure."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
        **kwargs,
    )


async def token_decode_middleware(request: Request, call_next: Any) -> Response:
    """Attach the verified principal, or ``None``, to ``request.state``.

    Never rejects a request; route dependencies enforce access.
    """
    decoder: TokenDecoder = request.app.state.token_decoder
    context = decoder(
        RequestContext(authorization=request.headers.get("authorization"))
    )
    request.state.principal = context.principal
    return await call_next(request)


async def request_logging_middleware(request: Request, call_next: Any) -> Response:
    """Log inbound requests with unique id and duration.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI middleware continuation callable.

    Returns:
        Response produced by downstream middleware/route handlers.

    Raises:
        Exception: Re-raises downstream exceptions after logging context.
    """
    request_id = str(uuid4())
    request.state.request_id = request_id
    started_at = time.perf_counter()

    log = logger.bind(
        request_id=request_id, method=request.method, path=request.url.path
    )
    log.info("Request started")

    try:
        response = await call_next(request)
    except Exception as exc:
        duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
        log.bind(duration_ms=duration_ms, error=str(exc)).error("Request failed")
        raise

    duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
    principal = getattr(request.state, "principal", None)
    response.headers["X-Request-ID"] = request_id
    log.bind(
        status_code=response.status_code,
        duration_ms=duration_ms,
        username=principal.username if principal is not None else "-",
    ).info("Request completed")
    return response


async def handle_jobly_error(request: Request, exc: JoblyError) -> JSONResponse:
    """Render application errors with the status each error class carries."""
    log = logger.bind(
        request_id=_get_request_id(request),
        path=request.url.path,
        status_code=exc.status_code,
    )
    if exc.status_code >= 500:
        log.bind(error=str(exc)).error("Application error")
        return error_response(exc.status_code, JoblyError.default_message)

    log.bind(detail=exc.message).warning("Request rejected")
    return error_response(exc.status_code, exc.message)


async def handle_http_exception(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Return the error envelope for routing and protocol errors.

    Args:
        request: Active incoming request.
        exc: Raised HTTP exception.

    Returns:
        JSONResponse carrying the exception's status.
    """
    message = exc.detail if isinstance(exc.detail, (str, list)) else "Request failed"
    logger.bind(
        request_id=_get_request_id(request),
        path=request.url.path,
        status_code=exc.status_code,
    ).warning("HTTP exception raised")
    return error_response(exc.status_code, message, headers=exc.headers)


async def handle_validation_exception(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report body and path validation failures as 400 with one message per error."""
    messages = format_validation_errors(exc.errors())
    logger.bind(
        request_id=_get_request_id(request),
        path=request.url.path,
        errors=messages,
    ).warning("Validation exception raised")
    return error_response(400, messages)


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return the error envelope for unhandled exceptions.

    Args:
        request: Active incoming request.
        exc: Unhandled exception.

    Returns:
        Generic 500 response; details stay in the logs.
    """
    logger.bind(
        request_id=_get_request_id(request),
        path=request.url.path,
        error=str(exc),
    ).exception("Unhandled exception")
    return error_response(500, "Internal server error")


def create_app(security: SecurityConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        security: Signing and hashing configuration; built from settings
            when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    )

    app.state.security = security or settings.security_config()
    app.state.token_decoder = TokenDecoder(app.state.security)

    # Registered innermost first: logging wraps token decoding.
    app.middleware("http")(token_decode_middleware)
    app.middleware("http")(request_logging_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_exception_handler(JoblyError, handle_jobly_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    logger.bind(
        environment=settings.ENVIRONMENT, api_prefix=settings.API_V1_PREFIX
    ).info("Application configured")
    return app


app = create_app()
