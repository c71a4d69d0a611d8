"""
Field-level text emission for rendered objects.

``StructuredFormatter`` knows how to write one object's boundaries, field
names and values into a buffer (a ``list[str]`` of chunks). It dispatches each
value to a detail or summary emitter according to its shape:

- mappings (``{k=v}``), arrays (tuples, ``array.array``: ``{a,b}``),
  other collections, plain objects
- ``None`` renders as the style's null text
- an object already being rendered in the same pass renders as its identity

The walker in ``walker.py`` drives it; ``interceptor.py`` wraps its emitters.
"""

from __future__ import annotations

import array
import datetime
import uuid
from collections.abc import Collection, Mapping
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any

from . import diagnostics
from .styles import FormatStyle

Buffer = list[str]

_SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    Enum,
    # Value types whose text form is their value
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.timezone,
    uuid.UUID,
    PurePath,
)
_TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray)
_ARRAY_TYPES: tuple[type, ...] = (tuple, array.array)


def is_scalar(value: Any) -> bool:
    """Scalars are never walked into and never tracked for cycles."""
    return isinstance(value, _SCALAR_TYPES)


def is_array(value: Any) -> bool:
    return isinstance(value, _ARRAY_TYPES)


def is_collection(value: Any) -> bool:
    return (
        isinstance(value, Collection)
        and not isinstance(value, _TEXT_TYPES)
        and not isinstance(value, Mapping)
        and not is_array(value)
    )


def class_name(cls: type) -> str:
    module = cls.__module__
    if module in (None, "builtins"):
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def short_class_name(cls: type) -> str:
    return cls.__qualname__


def identity_to_string(value: Any) -> str:
    return f"{class_name(type(value))}@{id(value):x}"


def _ends_with(buffer: Buffer, suffix: str) -> bool:
    if not suffix:
        return False
    tail = ""
    index = len(buffer)
    while index > 0 and len(tail) < len(suffix):
        index -= 1
        tail = buffer[index] + tail
    return tail.endswith(suffix)


def _drop_tail(buffer: Buffer, count: int) -> None:
    while count > 0 and buffer:
        last = buffer.pop()
        if len(last) > count:
            buffer.append(last[:-count])
            return
        count -= len(last)


class StructuredFormatter:
    """Writes objects, fields and values into a chunk buffer.

    Instances hold per-render state (objects currently being rendered, current
    decoration strings) and must not be shared between concurrent renders.
    """

    def __init__(self, style: FormatStyle | None = None) -> None:
        self.style = style or FormatStyle()
        self._content_start = self.style.content_start
        self._content_end = self.style.content_end
        self._field_separator = self.style.field_separator
        self._array_start = self.style.array_start
        self._array_end = self.style.array_end
        self._array_separator = self.style.array_separator
        self._rendering: set[int] = set()

    # Objects currently being rendered, by identity
    def register(self, value: Any) -> None:
        self._rendering.add(id(value))

    def unregister(self, value: Any) -> None:
        self._rendering.discard(id(value))

    def is_registered(self, value: Any) -> bool:
        return id(value) in self._rendering

    def is_full_detail(self, full_detail: bool | None) -> bool:
        if full_detail is None:
            return self.style.default_full_detail
        return bool(full_detail)

    # Object boundaries

    def append_start(self, buffer: Buffer, obj: Any) -> None:
        if obj is None:
            return
        self.register(obj)
        self.append_class_name(buffer, obj)
        self.append_identity_hash(buffer, obj)
        buffer.append(self._content_start)
        if self.style.field_separator_at_start:
            self.append_field_separator(buffer)

    def append_end(self, buffer: Buffer, obj: Any) -> None:
        if not self.style.field_separator_at_end:
            self.remove_last_field_separator(buffer)
        buffer.append(self._content_end)
        self.unregister(obj)

    def append_class_name(self, buffer: Buffer, obj: Any) -> None:
        if not self.style.use_class_name:
            return
        if self.style.use_short_class_name:
            buffer.append(short_class_name(type(obj)))
        else:
            buffer.append(class_name(type(obj)))

    def append_identity_hash(self, buffer: Buffer, obj: Any) -> None:
        if self.style.use_identity_hash:
            buffer.append(f"@{id(obj):x}")

    def append_to_string(self, buffer: Buffer, text: str | None) -> None:
        """Splice the field content of an earlier rendering into this one."""
        if text is None:
            return
        found = text.find(self._content_start)
        end = text.rfind(self._content_end)
        if found < 0 or end < 0:
            return
        start = found + len(self._content_start)
        if start >= end:
            return
        if self.style.field_separator_at_start:
            self.remove_last_field_separator(buffer)
        buffer.append(text[start:end])
        self.append_field_separator(buffer)

    def append_super(self, buffer: Buffer, text: str | None) -> None:
        self.append_to_string(buffer, text)

    # Fields

    def append(
        self,
        buffer: Buffer,
        field_name: str | None,
        value: Any,
        full_detail: bool | None = None,
    ) -> None:
        self.append_field_start(buffer, field_name)
        if value is None:
            self.append_null_text(buffer, field_name)
        else:
            self.append_internal(
                buffer, field_name, value, self.is_full_detail(full_detail)
            )
        self.append_field_end(buffer, field_name)

    def append_field_start(self, buffer: Buffer, field_name: str | None) -> None:
        if self.style.use_field_names and field_name is not None:
            buffer.append(field_name)
            buffer.append(self.style.field_name_value_separator)

    def append_field_end(self, buffer: Buffer, field_name: str | None) -> None:
        self.append_field_separator(buffer)

    def append_field_separator(self, buffer: Buffer) -> None:
        buffer.append(self._field_separator)

    def remove_last_field_separator(self, buffer: Buffer) -> None:
        if _ends_with(buffer, self._field_separator):
            _drop_tail(buffer, len(self._field_separator))

    def append_internal(
        self,
        buffer: Buffer,
        field_name: str | None,
        value: Any,
        detail: bool,
    ) -> None:
        scalar = is_scalar(value)
        if not scalar and self.is_registered(value):
            diagnostics.debug(
                "formatter",
                "cyclic reference rendered as identity",
                field=field_name,
                type=type(value).__name__,
            )
            self.append_cyclic_object(buffer, field_name, value)
            return

        if not scalar:
            self.register(value)
        try:
            if isinstance(value, Mapping):
                if detail:
                    self.append_map_detail(buffer, field_name, value)
                else:
                    self.append_summary_size(buffer, field_name, len(value))
            elif is_array(value):
                if detail:
                    self.append_array_detail(buffer, field_name, value)
                else:
                    self.append_summary_size(buffer, field_name, len(value))
            elif is_collection(value):
                if detail:
                    self.append_collection_detail(buffer, field_name, value)
                else:
                    self.append_summary_size(buffer, field_name, len(value))
            elif detail:
                self.append_detail(buffer, field_name, value)
            else:
                self.append_summary(buffer, field_name, value)
        finally:
            if not scalar:
                self.unregister(value)

    # Value emitters

    def append_detail(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        buffer.append(str(value))

    def append_summary(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        buffer.append(self.style.summary_object_start)
        buffer.append(short_class_name(type(value)))
        buffer.append(self.style.summary_object_end)

    def append_summary_size(self, buffer: Buffer, field_name: str | None, size: int) -> None:
        buffer.append(self.style.size_start)
        buffer.append(str(size))
        buffer.append(self.style.size_end)

    def append_null_text(self, buffer: Buffer, field_name: str | None) -> None:
        buffer.append(self.style.null_text)

    def append_cyclic_object(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        buffer.append(identity_to_string(value))

    def append_array_detail(self, buffer: Buffer, field_name: str | None, values: Any) -> None:
        buffer.append(self._array_start)
        for index, item in enumerate(values):
            if index:
                buffer.append(self._array_separator)
            self.append_item(buffer, field_name, item)
        buffer.append(self._array_end)

    def append_item(self, buffer: Buffer, field_name: str | None, item: Any) -> None:
        if item is None:
            self.append_null_text(buffer, field_name)
        else:
            self.append_internal(buffer, field_name, item, self.style.array_content_detail)

    def append_collection_detail(
        self, buffer: Buffer, field_name: str | None, values: Collection[Any]
    ) -> None:
        # Native rendering; the obfuscating formatter renders these like arrays
        buffer.append(str(values))

    def append_map_detail(
        self, buffer: Buffer, field_name: str | None, mapping: Mapping[Any, Any]
    ) -> None:
        buffer.append(str(mapping))
