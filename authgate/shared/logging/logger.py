"""loguru setup: stderr and file sinks, credential redaction, correlation ids."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_DEFAULT_LOG_FILE = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "instance", "authgate.log")
)

# stdlib loggers that are chatty at DEBUG
_QUIET_LOGGERS = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}

_CORRELATION_ID: ContextVar[str] = ContextVar("authgate_correlation_id", default="-")


def _stamp_correlation_id(record: dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = _CORRELATION_ID.get()


logger.configure(extra={"correlation_id": "-"}, patcher=_stamp_correlation_id)


class _InterceptHandler(logging.Handler):
    """Routes stdlib logging (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Replace all sinks. Safe to call again, e.g. once per app factory call.

    ``LOG_LEVEL`` and ``LOG_FILE`` override the defaults.
    """
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE
    os.makedirs(os.path.dirname(log_file), exist_ok=True)

    sink_options: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "backtrace": debug_mode,
        "diagnose": False,
        "filter": sanitize_record,
    }

    logger.remove()
    logger.add(sys.stderr, colorize=True, **sink_options)
    logger.add(
        log_file,
        colorize=False,
        encoding="utf-8",
        rotation="10 MB",
        retention=5,
        **sink_options,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
