"""
Structured logging (OpenTelemetry-shaped).

Every texttok module logs through the single ``texttok`` logger. Records carry
a ``scope`` attribute ("tokenizer", "vocab", ...) and any ``extra`` fields
passed at the call site.

Usage::

    from ._logging import scoped_logger

    log = scoped_logger("vocab")
    log.debug("Vocabulary installed", extra={"vocab_size": 30522})

Environment::

    TEXTTOK_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: info)
    TEXTTOK_LOG_FORMAT=json|human (default: human if tty, json if piped)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Any

__all__ = ["logger", "setup_logging", "scoped_logger", "JsonFormatter", "HumanFormatter"]

SERVICE_NAME = "texttok"


def _get_version() -> str:
    try:
        return get_version(SERVICE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


# =============================================================================
# Level Mapping
# =============================================================================

_LEVEL_TO_SEVERITY = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

# Case-insensitive names accepted by TEXTTOK_LOG_LEVEL and setup_logging()
_NAME_TO_LEVEL = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
    "none": logging.CRITICAL + 10,
}

# Levels that include code location
_CODE_LOCATION_LEVELS = {logging.DEBUG, logging.ERROR, logging.CRITICAL}

_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "scope",
        "message",
    }
)


def _infer_scope(logger_name: str) -> str:
    """Infer scope from logger name when not explicitly provided."""
    if "vocab" in logger_name:
        return "vocab"
    if "batch" in logger_name:
        return "batch"
    if "token" in logger_name:
        return "tokenizer"
    return logger_name.split(".")[-1] if logger_name else SERVICE_NAME


def _strip_path_prefix(filepath: str) -> str:
    prefix = f"{SERVICE_NAME}/"
    if prefix in filepath:
        return filepath[filepath.index(prefix) + len(prefix) :]
    return filepath


# =============================================================================
# Formatters
# =============================================================================


class JsonFormatter(logging.Formatter):
    """One JSON object per record, following the OpenTelemetry log data model."""

    def __init__(self) -> None:
        super().__init__()
        self._version = _get_version()

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        # RFC3339 with nanosecond field width
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{int(dt.microsecond * 1000):09d}Z"

        attributes: dict[str, Any] = {
            "scope": getattr(record, "scope", None) or _infer_scope(record.name)
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_FIELDS and not key.startswith("_"):
                attributes[key] = value

        if record.levelno in _CODE_LOCATION_LEVELS:
            attributes["code.filepath"] = _strip_path_prefix(record.pathname)
            attributes["code.lineno"] = record.lineno

        log_record = {
            "timestamp": timestamp,
            "severityText": _LEVEL_TO_SEVERITY.get(record.levelno, "INFO"),
            "body": record.getMessage(),
            "attributes": attributes,
            "resource": {
                "service.name": SERVICE_NAME,
                "service.version": self._version,
            },
        }
        return json.dumps(log_record, separators=(",", ":"), default=str)


class HumanFormatter(logging.Formatter):
    """Single-line formatter for terminals."""

    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"
    _RED = "\x1b[31m"
    _YELLOW = "\x1b[33m"
    _CYAN = "\x1b[36m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _level_color(self, levelno: int) -> str:
        if not self._use_colors:
            return ""
        if levelno <= logging.DEBUG:
            return self._DIM
        if levelno >= logging.ERROR:
            return self._RED
        if levelno >= logging.WARNING:
            return self._YELLOW
        return ""

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        severity = _LEVEL_TO_SEVERITY.get(record.levelno, "INFO")
        scope = getattr(record, "scope", None) or _infer_scope(record.name)
        level_color = self._level_color(record.levelno)

        parts = [dt.strftime("%H:%M:%S"), " "]
        if level_color:
            parts.append(level_color)
        parts.append(f"{severity:<5} ")
        if level_color:
            parts.append(self._RESET)

        if self._use_colors:
            parts.append(f"{self._CYAN}[{scope}]{self._RESET} ")
        else:
            parts.append(f"[{scope}] ")

        parts.append(record.getMessage())

        vocab_size = getattr(record, "vocab_size", None)
        if vocab_size is not None:
            parts.append(f" (vocab_size={vocab_size})")

        if record.levelno in _CODE_LOCATION_LEVELS:
            location = f" [{_strip_path_prefix(record.pathname)}:{record.lineno}]"
            if self._use_colors:
                location = f"{self._DIM}{location}{self._RESET}"
            parts.append(location)

        return "".join(parts)


# =============================================================================
# Logger Setup
# =============================================================================


def _get_log_level() -> int:
    level_name = os.environ.get("TEXTTOK_LOG_LEVEL", "info")
    return _NAME_TO_LEVEL.get(level_name.lower(), logging.INFO)


def _get_log_format() -> str:
    fmt = os.environ.get("TEXTTOK_LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "human" if sys.stderr.isatty() else "json"


def _create_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if _get_log_format() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(HumanFormatter(use_colors=sys.stderr.isatty()))
    return handler


logger = logging.getLogger(SERVICE_NAME)


def _setup_default_handler() -> None:
    # Respect handlers installed by the application
    if logger.handlers:
        return
    logger.addHandler(_create_handler())
    logger.setLevel(_get_log_level())


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
) -> None:
    """
    Configure texttok logging.

    Parameters
    ----------
    level : str or int, default "INFO"
        Log level name ("DEBUG", "INFO", "WARN", "ERROR", "FATAL", "OFF")
        or a ``logging`` constant.

    format : str, optional
        "json" or "human". Defaults to TEXTTOK_LOG_FORMAT or TTY detection.

    Examples
    --------
    ::

        >>> import texttok
        >>> texttok.setup_logging("DEBUG", format="human")
    """
    if isinstance(level, str):
        level = _NAME_TO_LEVEL.get(level.lower(), logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if format:
        os.environ["TEXTTOK_LOG_FORMAT"] = format

    logger.addHandler(_create_handler())
    logger.setLevel(level)


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges call-site extra with a fixed scope."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra: dict[str, Any] = dict(self.extra) if self.extra else {}
        if "extra" in kwargs:
            extra.update(kwargs["extra"])
        kwargs["extra"] = extra
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """
    Create a logger adapter with a fixed scope.

    Parameters
    ----------
    scope : str
        The scope name (e.g., "tokenizer", "vocab").
    """
    return _ScopedLoggerAdapter(logger, {"scope": scope})


_setup_default_handler()
