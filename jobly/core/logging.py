"""Centralized Loguru configuration for the API."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from loguru import logger

MAX_LOG_FILE_BYTES = 500 * 1024 * 1024

_DEFAULT_EXTRA = {
    "request_id": "-",
    "method": "-",
    "path": "-",
    "status_code": "-",
    "username": "-",
}

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> | "
    "req=<magenta>{extra[request_id]}</magenta> "
    "user=<magenta>{extra[username]}</magenta> "
    "method=<cyan>{extra[method]}</cyan> "
    "path=<cyan>{extra[path]}</cyan> "
    "status=<cyan>{extra[status_code]}</cyan> - "
    "<level>{message}</level>"
)

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} | "
    "request_id={extra[request_id]} user={extra[username]} "
    "method={extra[method]} path={extra[path]} "
    "status={extra[status_code]} - {message}"
)


def _daily_or_size_rotation(message: Any, file: Any) -> bool:
    """Rotate when date changes or file exceeds 500MB."""
    record_time = message.record["time"]
    current_file_date = Path(file.name).stem.split("_")[-1]
    if record_time.strftime("%Y-%m-%d") != current_file_date:
        return True
    return file.tell() >= MAX_LOG_FILE_BYTES


def setup_logging(
    log_level: str = "INFO",
    *,
    debug: bool = False,
    log_dir: Path | None = Path("logs"),
) -> None:
    """Configure console and file logging.

    Args:
        log_level: Minimum level for application logs.
        debug: Force DEBUG level and enable loguru diagnostics.
        log_dir: Directory for rotated log files; ``None`` logs to stdout only.
    """
    logger.remove()
    logger.configure(extra=dict(_DEFAULT_EXTRA))

    effective_level = "DEBUG" if debug else log_level.upper()

    logger.add(
        sys.stdout,
        level=effective_level,
        colorize=True,
        enqueue=True,
        backtrace=debug,
        diagnose=debug,
        format=_CONSOLE_FORMAT,
    )

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "app_{time:YYYY-MM-DD}.log",
        level=effective_level,
        rotation=_daily_or_size_rotation,
        retention="30 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        format=_FILE_FORMAT,
    )

    logger.add(
        log_dir / "errors_{time:YYYY-MM-DD}.log",
        level="ERROR",
        rotation="100 MB",
        retention="90 days",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=debug,
        format=_FILE_FORMAT,
    )


__all__ = ["setup_logging"]
