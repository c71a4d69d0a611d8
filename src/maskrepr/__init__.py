"""
Public entrypoints for maskrepr.

Render objects as text while obfuscating designated fields, so passwords,
tokens and other sensitive values never reach logs.

Example:
    from maskrepr import builder, fixed_length, no_class_name_style

    snapshot = (
        builder(no_class_name_style())
        .with_field("password", fixed_length(3))
        .snapshot()
    )
    snapshot.format(account)  # "[user=alice,password=***]"
"""

from __future__ import annotations

from ._version import __version__
from .builder import (
    FieldConfigurer,
    LazyRepr,
    ObfuscatingFormatterBuilder,
    Snapshot,
    builder,
)
from .core.errors import (
    DuplicateFieldError,
    ErrorCategory,
    InvalidConfigurationError,
    MaskReprError,
    ObfuscationTransformError,
)
from .core.formatter import StructuredFormatter
from .core.interceptor import ObfuscatingFormatter
from .core.presets import (
    default_style,
    get_preset,
    list_presets,
    multi_line_recursive_style,
    multi_line_style,
    no_class_name_style,
    no_field_names_style,
    recursive_style,
    short_prefix_style,
    simple_style,
)
from .core.registry import CaseSensitivity, FieldConfig, FieldRegistry
from .core.settings import Settings
from .core.styles import FormatStyle
from .core.walker import ReprBuilder, reflection_to_string
from .obfuscators import all_chars, fixed_length, fixed_value, none, portion

__all__ = [
    "__version__",
    "VERSION",
    # Builder
    "builder",
    "ObfuscatingFormatterBuilder",
    "FieldConfigurer",
    "Snapshot",
    "LazyRepr",
    # Rendering
    "ObfuscatingFormatter",
    "StructuredFormatter",
    "ReprBuilder",
    "reflection_to_string",
    # Registry
    "CaseSensitivity",
    "FieldConfig",
    "FieldRegistry",
    # Styles
    "FormatStyle",
    "default_style",
    "multi_line_style",
    "no_field_names_style",
    "short_prefix_style",
    "simple_style",
    "no_class_name_style",
    "recursive_style",
    "multi_line_recursive_style",
    "get_preset",
    "list_presets",
    # Obfuscators
    "fixed_length",
    "fixed_value",
    "all_chars",
    "portion",
    "none",
    # Config and errors
    "Settings",
    "MaskReprError",
    "ErrorCategory",
    "InvalidConfigurationError",
    "DuplicateFieldError",
    "ObfuscationTransformError",
]

# Version info for compatibility
VERSION = __version__
