"""Loguru setup with per-request correlation ids.

Every record is patched with the correlation id of the current context, so
both :data:`logger` and stdlib loggers routed through the intercept handler
carry it without explicit binding.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "taskmanager.log"

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


def _patch_correlation_id(record) -> None:
    record["extra"]["correlation_id"] = _CORRELATION_ID.get()


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (werkzeug, sqlalchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(
    level: str | None = None,
    *,
    log_file: str | os.PathLike[str] | None = None,
    debug: bool = False,
) -> None:
    level = (level or "INFO").upper()
    path = Path(log_file or os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.configure(extra={"correlation_id": "-"}, patcher=_patch_correlation_id)
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=debug,
        diagnose=False,
        filter=sanitize_record,
    )
    _logger.add(
        path,
        level=level,
        format=_FMT,
        colorize=False,
        backtrace=debug,
        diagnose=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        filter=sanitize_record,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for noisy in ("werkzeug", "sqlalchemy.engine", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if debug else logging.WARNING)


logger = _logger

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
