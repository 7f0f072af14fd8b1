"""Loguru setup shared by the app, the CLI entry point and the tests.

Every record carries the id of the HTTP request that produced it. Records
emitted outside a request show ``-``.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")

_logger.configure(extra={"request_id": "-"})

# third-party loggers that are too chatty at DEBUG
_QUIET = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}


class _StdlibBridge(logging.Handler):
    """Route stdlib ``logging`` records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            request_id=_REQUEST_ID.get()
        ).log(level, record.getMessage())


class _RequestBoundLogger:
    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(request_id=_REQUEST_ID.get()), name)


def bind_request_id(value: str | None) -> None:
    _REQUEST_ID.set(value or "-")


def current_request_id() -> str:
    return _REQUEST_ID.get()


def unbind_request_id() -> None:
    _REQUEST_ID.set("-")


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    level = level.upper()
    common = {"level": level, "format": _FMT, "filter": sanitize_record, "diagnose": False}

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(path, colorize=False, enqueue=True, encoding="utf-8", **common)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, floor in _QUIET.items():
        logging.getLogger(name).setLevel(floor)


logger = _RequestBoundLogger()

__all__ = [
    "bind_request_id",
    "current_request_id",
    "logger",
    "setup_logging",
    "unbind_request_id",
]
