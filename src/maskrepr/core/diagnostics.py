"""
Structured internal diagnostics.

Diagnostics are emitted through the ``maskrepr`` stdlib logger only when
``Settings().core.internal_logging_enabled`` is true. The flag is read once
and cached; tests reset ``_internal_logging_enabled`` to ``None``.

Diagnostics never carry rendered or captured text, only field names and
exception types.
"""

from __future__ import annotations

import logging
from typing import Any

LOGGER_NAME = "maskrepr"

_logger = logging.getLogger(LOGGER_NAME)
_logger.addHandler(logging.NullHandler())

# None means "not read from settings yet"
_internal_logging_enabled: bool | None = None


def _is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(
                Settings().core.internal_logging_enabled
            )
        except Exception:
            # Invalid environment must not break rendering
            _internal_logging_enabled = False
    return _internal_logging_enabled


def set_enabled(enabled: bool | None) -> None:
    """Override the cached flag; ``None`` re-reads settings on next use."""
    global _internal_logging_enabled
    _internal_logging_enabled = enabled


def _emit(level: int, component: str, message: str, fields: dict[str, Any]) -> None:
    if not _is_enabled():
        return
    payload = {"component": component, **fields}
    details = " ".join(f"{k}={v}" for k, v in fields.items())
    _logger.log(
        level,
        "[%s] %s%s",
        component,
        message,
        f" ({details})" if details else "",
        extra={"maskrepr_diagnostic": payload},
    )


def debug(component: str, message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, component, message, fields)


def warn(component: str, message: str, **fields: Any) -> None:
    _emit(logging.WARNING, component, message, fields)
