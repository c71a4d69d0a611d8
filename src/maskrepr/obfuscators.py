"""
Ready-made obfuscation transforms.

Any ``Callable[[str], str]`` can be registered for a field; these cover the
common masking shapes.
"""

from __future__ import annotations

from .core.errors import InvalidConfigurationError
from .core.registry import TextTransform


def _check_mask_char(mask_char: str) -> None:
    if not isinstance(mask_char, str) or len(mask_char) != 1:
        raise InvalidConfigurationError(
            "mask_char must be a single character", mask_char=repr(mask_char)
        )


def fixed_length(length: int, mask_char: str = "*") -> TextTransform:
    """Replace any text with ``length`` mask characters.

    Hides the length of the original value as well as its content.
    """
    if length < 0:
        raise InvalidConfigurationError(
            "length must not be negative", length=length
        )
    _check_mask_char(mask_char)
    masked = mask_char * length

    def obfuscate(_text: str) -> str:
        return masked

    return obfuscate


def fixed_value(value: str) -> TextTransform:
    """Replace any text with ``value``."""
    if not isinstance(value, str):
        raise InvalidConfigurationError(
            "value must be a string", value_type=type(value).__name__
        )

    def obfuscate(_text: str) -> str:
        return value

    return obfuscate


def all_chars(mask_char: str = "*") -> TextTransform:
    """Replace every character, preserving the length."""
    _check_mask_char(mask_char)

    def obfuscate(text: str) -> str:
        return mask_char * len(text)

    return obfuscate


def portion(
    *,
    keep_at_start: int = 0,
    keep_at_end: int = 0,
    mask_char: str = "*",
) -> TextTransform:
    """Mask the middle of the text, keeping a number of leading/trailing chars.

    Text too short to keep both ends is masked completely.
    """
    if keep_at_start < 0 or keep_at_end < 0:
        raise InvalidConfigurationError(
            "keep_at_start and keep_at_end must not be negative",
            keep_at_start=keep_at_start,
            keep_at_end=keep_at_end,
        )
    _check_mask_char(mask_char)

    def obfuscate(text: str) -> str:
        if keep_at_start + keep_at_end >= len(text):
            return mask_char * len(text)
        end = len(text) - keep_at_end
        return text[:keep_at_start] + mask_char * (end - keep_at_start) + text[end:]

    return obfuscate


def none() -> TextTransform:
    """Leave text unchanged.

    Registering a field with ``none()`` still marks its span as obfuscated, so
    nested fields inside it are not matched on their own.
    """

    def obfuscate(text: str) -> str:
        return text

    return obfuscate
