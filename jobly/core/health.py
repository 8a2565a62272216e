"""Infrastructure health checks for core dependencies."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Literal

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from jobly.core.config import settings

ServiceStatus = Literal["healthy", "unhealthy"]


class HealthService:
    """Run health checks for backend infrastructure dependencies."""

    def __init__(self, engine: AsyncEngine, timeout_seconds: float = 2.0) -> None:
        """Initialize health service settings.

        Args:
            engine: Engine whose connectivity is probed.
            timeout_seconds: Max time to wait for each dependency check.
        """
        self.engine = engine
        self.timeout_seconds = timeout_seconds

    async def get_health_payload(self) -> dict[str, Any]:
        """Build aggregated health status for API responses.

        Returns:
            Dictionary containing overall status, timestamp, and per-service details.
        """
        database_status = await self._check_database()
        api_status = self._check_api()
        overall_status: ServiceStatus = (
            "healthy"
            if database_status["status"] == "healthy"
            and api_status["status"] == "healthy"
            else "unhealthy"
        )

        return {
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {
                "database": database_status,
                "api": api_status,
            },
        }

    @staticmethod
    def _check_api() -> dict[str, Any]:
        """Return API status metadata for health payload."""
        return {
            "status": "healthy",
            "version": settings.VERSION,
        }

    async def _check_database(self) -> dict[str, Any]:
        """Validate database connectivity and measure response time.

        Returns:
            Dictionary with status, response time in milliseconds, and optional error.
        """
        started_at = perf_counter()

        try:
            await asyncio.wait_for(self._ping_database(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            response_time_ms = round((perf_counter() - started_at) * 1000, 2)
            logger.error(
                "Database health check timed out",
                timeout_seconds=self.timeout_seconds,
                response_time_ms=response_time_ms,
            )
            return {
                "status": "unhealthy",
                "response_time_ms": response_time_ms,
                "error": f"timeout after {self.timeout_seconds}s",
            }
        except (SQLAlchemyError, OSError) as exc:
            response_time_ms = round((perf_counter() - started_at) * 1000, 2)
            logger.error(
                "Database health check failed",
                response_time_ms=response_time_ms,
                error=str(exc),
            )
            return {
                "status": "unhealthy",
                "response_time_ms": response_time_ms,
                "error": str(exc),
            }

        response_time_ms = round((perf_counter() - started_at) * 1000, 2)
        return {
            "status": "healthy",
            "response_time_ms": response_time_ms,
        }

    async def _ping_database(self) -> None:
        """Execute lightweight query to validate database availability.

        Raises:
            SQLAlchemyError: If the query cannot be executed.
        """
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
