"""
Error taxonomy for maskrepr.

Configuration errors are raised eagerly at the builder call site. Render
errors abort the whole render; a partially rendered buffer is never returned.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    RENDER = "render"


class MaskReprError(Exception):
    """Base class for all maskrepr errors.

    Carries a category, an optional underlying cause and free-form context
    (never the text being rendered).
    """

    category: ErrorCategory = ErrorCategory.CONFIGURATION

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context: dict[str, Any] = dict(context)


class InvalidConfigurationError(MaskReprError, ValueError):
    """Raised for missing or invalid configuration (names, transforms, presets)."""


class DuplicateFieldError(InvalidConfigurationError):
    """Raised when a field is registered twice under the same case sensitivity."""

    def __init__(self, field_name: str, case_sensitivity: Any) -> None:
        mode = getattr(case_sensitivity, "value", case_sensitivity)
        super().__init__(
            f"Field '{field_name}' is already registered ({mode})",
            field=field_name,
            case_sensitivity=mode,
        )
        self.field_name = field_name
        self.case_sensitivity = case_sensitivity


class ObfuscationTransformError(MaskReprError):
    """Raised when an obfuscation transform fails during a render."""

    category = ErrorCategory.RENDER

    def __init__(self, field_name: str, cause: BaseException) -> None:
        super().__init__(
            f"Obfuscation of field '{field_name}' failed: {type(cause).__name__}",
            cause=cause,
            field=field_name,
        )
        self.field_name = field_name
