"""
Logging helpers for the Andromeda client.

The library only ever obtains loggers through :func:`get_logger`; it never
installs handlers on its own. Applications (including the bundled CLI) call
:func:`configure_logging` once to route records to ``stderr`` using the
:class:`StructuredLogFormatter`, which renders ``extra`` metadata as
``key=value`` pairs and masks anything that looks like a credential.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from copy import copy
from logging import Logger, LoggerAdapter
from typing import Any, Iterable, Mapping, MutableMapping, Optional, Sequence

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = "WARNING"
_ENV_LEVEL = "ANDROMEDA_LOG_LEVEL"
_ENV_COLOR = "ANDROMEDA_LOG_COLOR"
_ROOT_LOGGER = "andromeda_api"
_EXTRA_FOCUS_ORDER: Sequence[str] = (
    "operation",
    "method",
    "url",
    "status_code",
    "result_code",
    "duration",
    "error",
)
_REDACTED_KEYS = frozenset({"api_key", "apikey", "password", "authorization"})
_REDACTED = "***"

_LEVEL_STYLES = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[95m",
}
_RESET = "\033[0m"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _resolve_level(level: Optional[int | str]) -> int:
    if isinstance(level, int):
        return level
    candidate = (level or os.getenv(_ENV_LEVEL) or DEFAULT_LEVEL).upper()
    resolved = logging.getLevelName(candidate)
    return resolved if isinstance(resolved, int) else logging.WARNING


def _supports_color(stream: Any) -> bool:
    preference = (os.getenv(_ENV_COLOR) or "auto").strip().lower()
    if preference in {"1", "true", "yes", "on"}:
        return True
    if preference in {"0", "false", "no", "off"}:
        return False
    return hasattr(stream, "isatty") and bool(stream.isatty())


def _iter_extras(record: logging.LogRecord) -> Iterable[tuple[str, Any]]:
    payload = {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS and not key.startswith("_") and value is not None}

    for key in _EXTRA_FOCUS_ORDER:
        if key in payload:
            yield key, payload.pop(key)

    for key in sorted(payload):
        yield key, payload[key]


def _format_extra_value(key: str, value: Any) -> str:
    if key.lower() in _REDACTED_KEYS:
        return _REDACTED
    if isinstance(value, Mapping):
        masked = {name: (_REDACTED if str(name).lower() in _REDACTED_KEYS else item) for name, item in value.items()}
        return json.dumps(masked, ensure_ascii=False, default=str)
    if isinstance(value, (list, tuple, set)):
        return "[" + ", ".join(_format_extra_value("", item) for item in value) + "]"
    if isinstance(value, float):
        return f"{value:.4g}"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """Formatter that appends structured extras and supports optional colour output."""

    def __init__(self, *, use_color: bool = False) -> None:
        super().__init__(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        working = copy(record)
        if self.use_color:
            style = _LEVEL_STYLES.get(working.levelname)
            if style:
                working.levelname = f"{style}{working.levelname}{_RESET}"
        base = super().format(working)
        extras = " ".join(f"{key}={_format_extra_value(key, value)}" for key, value in _iter_extras(record))
        if extras:
            return f"{base} | {extras}"
        return base


def configure_logging(level: Optional[int | str] = None, *, stream: Any = None) -> logging.Handler:
    """
    Attach a structured ``stderr`` handler to the ``andromeda_api`` logger.

    Calling the function again replaces the previously installed handler, so
    the CLI can apply ``--log-level`` after the environment default.
    """

    logger = logging.getLogger(_ROOT_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_andromeda_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(StructuredLogFormatter(use_color=_supports_color(handler.stream)))
    handler._andromeda_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    return handler


def get_logger(name: str, *, extra: Optional[Mapping[str, object]] = None) -> LoggerAdapter:
    """
    Return a :class:`logging.LoggerAdapter` bound to ``extra``.

    ``None`` values in ``extra`` are dropped so callers can pass optional
    context without filtering it first.
    """

    base: Logger = logging.getLogger(name)
    payload: MutableMapping[str, object] = {}
    if extra:
        payload.update({key: value for key, value in extra.items() if value is not None})
    return _MergingAdapter(base, payload)


class _MergingAdapter(LoggerAdapter):
    """Adapter that merges per-call ``extra`` with the bound context instead of replacing it."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        merged = dict(self.extra or {})
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs
