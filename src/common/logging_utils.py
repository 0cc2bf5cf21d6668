"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point plus the small helpers
used for structured DEBUG traces across the share client and the resolver:
``extra_context`` builds the ``extra=`` payload, ``safe_url`` and ``redact``
keep share passwords and signed download links out of log output, and
``Timer`` measures request durations.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_KEYS = {
    "sharepwd",
    "pwd",
    "password",
    "token",
    "access_token",
    "auth_key",
    "signature",
    "sign",
    "x-amz-signature",
    "x-amz-credential",
}
_REDACTED = "[REDACTED]"
_CONTEXT_FIELDS = ("event", "component", "action", "outcome")


class _ContextFormatter(logging.Formatter):
    """Append structured context fields when a record carries them."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        ctx = getattr(record, "context", None)
        if not ctx or not is_debug_enabled(logging.getLogger()):
            return base
        pairs = " ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
        return f"{base} [{pairs}]" if pairs else base


def configure_logging() -> None:
    """Configure the root logger once; later calls only adjust the level."""
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not any(getattr(h, "_sharerelease", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
        handler._sharerelease = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    Well-known keys (event, component, action, outcome) are always present so
    formatters can rely on them; any additional keyword is passed through.
    """
    ctx: Dict[str, Any] = {key: fields.pop(key, None) for key in _CONTEXT_FIELDS}
    ctx.update(fields)
    return {"context": ctx}


def redact(value: Optional[str]) -> str:
    """Mask a secret, keeping nothing of the original value."""
    if not value:
        return ""
    return _REDACTED


def safe_url(url: str) -> str:
    """Return ``url`` with sensitive query parameters and userinfo redacted."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return re.sub(r"(?i)(pwd|password|token)=[^&#]*", r"\1=" + _REDACTED, url)

    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{_REDACTED}@{netloc.rsplit('@', 1)[1]}"

    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        query = urlencode(
            [(k, _REDACTED if k.lower() in _SENSITIVE_KEYS and v else v) for k, v in pairs],
            safe="[]",
        )

    fragment = parts.fragment
    return urlunsplit((parts.scheme, netloc, parts.path, query, fragment))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._end = time.perf_counter()
        return False

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
