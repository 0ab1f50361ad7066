from __future__ import annotations

import contextvars
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from clavesalud.app.common.log_redaction import enmascarar_texto, enmascarar_valor

_RUN_ID: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")
_USER: contextvars.ContextVar[str | None] = contextvars.ContextVar("user", default=None)
_CENTRO: contextvars.ContextVar[str] = contextvars.ContextVar("centro_id", default="-")
_SOFT_KEY = "is_soft_crash"
_FATAL_KEY = "is_fatal_crash"


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID.get()
        record.user = _USER.get() or "-"
        record.centro_id = _CENTRO.get()
        return True


class _SoftCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, _SOFT_KEY, False))


class _FatalCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, _FATAL_KEY, False) or record.levelno >= logging.CRITICAL)


class _ExcludeCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not bool(getattr(record, _SOFT_KEY, False) or getattr(record, _FATAL_KEY, False))


class _StructuredFormatter(logging.Formatter):
    def __init__(self, *, json_mode: bool) -> None:
        super().__init__()
        self._json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": enmascarar_texto(record.getMessage()),
            "run_id": getattr(record, "run_id", "-"),
            "centro_id": getattr(record, "centro_id", "-"),
            "action": getattr(record, "action", "-"),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
            "user": getattr(record, "user", "-"),
        }
        if record.exc_info:
            payload["traceback"] = enmascarar_texto(self.formatException(record.exc_info))
        if self._json_mode:
            return json.dumps(payload, ensure_ascii=False)
        return " ".join(f"{key}={value}" for key, value in payload.items())


class ContextLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = {"run_id": _RUN_ID.get(), "centro_id": _CENTRO.get(), "user": _USER.get() or "-", **extra}
        kwargs["extra"] = enmascarar_valor(merged)
        return enmascarar_valor(msg), kwargs


def _file_handler(path: Path, *, max_bytes: int, backups: int) -> RotatingFileHandler:
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")


def configure_logging(app_name: str, log_dir: Path, level: str = "INFO", json: bool = True) -> None:
    """
    Configura el logging raíz:
    - consola (stderr) y app.log para el flujo operativo
    - crash_soft.log para excepciones controladas (log_soft_exception)
    - crash_fatal.log para CRITICAL y excepciones no capturadas
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = _StructuredFormatter(json_mode=json)
    context_filter = _ContextFilter()

    console = logging.StreamHandler(stream=sys.__stderr__)
    handlers: list[tuple[logging.Handler, logging.Filter]] = [
        (console, _ExcludeCrashFilter()),
        (_file_handler(log_dir / "app.log", max_bytes=2_000_000, backups=5), _ExcludeCrashFilter()),
        (_file_handler(log_dir / "crash_soft.log", max_bytes=1_000_000, backups=3), _SoftCrashFilter()),
        (_file_handler(log_dir / "crash_fatal.log", max_bytes=1_000_000, backups=3), _FatalCrashFilter()),
    ]
    for handler, routing_filter in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        handler.addFilter(routing_filter)
        root_logger.addHandler(handler)

    logging.captureWarnings(True)
    get_logger(__name__).info("logging_configured", extra={"app_name": app_name})


def get_logger(name: str) -> logging.LoggerAdapter:
    return ContextLoggerAdapter(logging.getLogger(name), {})


def set_run_context(run_id: str, user: str | None = None) -> None:
    _RUN_ID.set(run_id)
    _USER.set(user)


def set_centro_context(centro_id: str | None) -> None:
    _CENTRO.set(centro_id or "-")


def log_soft_exception(logger: logging.LoggerAdapter, exc: Exception, context: dict[str, Any]) -> None:
    logger.error(
        "soft_exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={_SOFT_KEY: True, "context": context},
    )
    logger.error(
        "soft_exception_operational",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"context": context},
    )
