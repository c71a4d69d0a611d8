"""Built-in formatting presets for common output shapes."""

from __future__ import annotations

import os
from typing import Callable, Literal

from .errors import InvalidConfigurationError
from .styles import FormatStyle, RecursePredicate

PresetName = Literal[
    "default",
    "multi_line",
    "multi_line_recursive",
    "no_class_name",
    "no_field_names",
    "recursive",
    "short_prefix",
    "simple",
]

DEFAULT_INDENT_WIDTH = 2


def _recurse_always(_cls: type) -> bool:
    return True


def _require_predicate(recurse_into: RecursePredicate | None) -> RecursePredicate:
    if recurse_into is None:
        return _recurse_always
    if not callable(recurse_into):
        raise InvalidConfigurationError(
            "recurse_into must be callable", value=type(recurse_into).__name__
        )
    return recurse_into


def default_style() -> FormatStyle:
    """``module.Class@1f2e[a=1,b=2]``"""
    return FormatStyle()


def multi_line_style() -> FormatStyle:
    """One field per line, indented by two spaces."""
    return FormatStyle(
        content_start="[",
        field_separator=os.linesep + "  ",
        field_separator_at_start=True,
        content_end=os.linesep + "]",
    )


def no_field_names_style() -> FormatStyle:
    return FormatStyle(use_field_names=False)


def short_prefix_style() -> FormatStyle:
    """``Class[a=1,b=2]``"""
    return FormatStyle(use_short_class_name=True, use_identity_hash=False)


def simple_style() -> FormatStyle:
    """``1,2``"""
    return FormatStyle(
        use_class_name=False,
        use_identity_hash=False,
        use_field_names=False,
        content_start="",
        content_end="",
    )


def no_class_name_style() -> FormatStyle:
    """``[a=1,b=2]``"""
    return FormatStyle(use_class_name=False, use_identity_hash=False)


def recursive_style(recurse_into: RecursePredicate | None = None) -> FormatStyle:
    """Default style that walks into nested objects accepted by ``recurse_into``.

    Strings, numbers, bytes, decimals, enums, dates, times, UUIDs and paths
    are never walked into, nor are objects without walkable attributes.
    """
    return FormatStyle(recurse_into=_require_predicate(recurse_into))


def multi_line_recursive_style(
    recurse_into: RecursePredicate | None = None,
    *,
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> FormatStyle:
    """Recursive style with one field or element per line, indented per level."""
    if indent_width < 1:
        raise InvalidConfigurationError(
            "indent_width must be at least 1", indent_width=indent_width
        )
    return FormatStyle(
        recurse_into=_require_predicate(recurse_into),
        indent_width=indent_width,
    )


PRESETS: dict[str, Callable[[], FormatStyle]] = {
    "default": default_style,
    "multi_line": multi_line_style,
    "multi_line_recursive": multi_line_recursive_style,
    "no_class_name": no_class_name_style,
    "no_field_names": no_field_names_style,
    "recursive": recursive_style,
    "short_prefix": short_prefix_style,
    "simple": simple_style,
}


def validate_preset(name: str) -> None:
    """Validate preset name.

    Raises:
        InvalidConfigurationError: If preset name is invalid
    """
    if name not in PRESETS:
        valid = ", ".join(list_presets())
        raise InvalidConfigurationError(
            f"Invalid preset '{name}'. Valid presets: {valid}", preset=name
        )


def get_preset(name: PresetName | str, *, indent_width: int | None = None) -> FormatStyle:
    """Get a preset style by name.

    ``indent_width`` only applies to presets that indent nested values.
    """
    validate_preset(name)
    style = PRESETS[name]()
    if indent_width is not None and style.indent_width:
        style = style.with_changes(indent_width=indent_width)
    return style


def list_presets() -> list[str]:
    """Return sorted list of available preset names."""
    return sorted(PRESETS)
