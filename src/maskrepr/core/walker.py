"""
Attribute walker and manual field builder.

``reflection_to_string`` enumerates an object's attributes and hands each one
to a formatter. ``ReprBuilder`` lets hand-written ``__repr__`` methods append
fields explicitly, including summary renderings.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Collection

from .formatter import Buffer, StructuredFormatter

_MISSING = object()


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def field_names(obj: Any) -> list[str]:
    """Names of the attributes rendered for ``obj``, in declaration order.

    Dataclass fields with ``repr=False`` are skipped; otherwise ``__slots__``
    across the MRO are listed before instance ``__dict__`` entries.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [f.name for f in dataclasses.fields(obj) if f.repr]

    names: list[str] = []
    for klass in reversed(type(obj).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in names and not _is_dunder(slot):
                names.append(slot)
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name in instance_dict:
            if name not in names and not _is_dunder(name):
                names.append(name)
    return names


def walk(
    obj: Any,
    formatter: StructuredFormatter,
    buffer: Buffer,
    *,
    excluded_fields: Collection[str] = (),
    exclude_none: bool = False,
) -> None:
    """Render ``obj`` into ``buffer``, one ``formatter.append`` per attribute."""
    if obj is None:
        formatter.append_null_text(buffer, None)
        return
    formatter.append_start(buffer, obj)
    try:
        for name in field_names(obj):
            if name in excluded_fields:
                continue
            value = getattr(obj, name, _MISSING)
            if value is _MISSING or (value is None and exclude_none):
                continue
            formatter.append(buffer, name, value)
        formatter.append_end(buffer, obj)
    finally:
        # A failed render must not leave obj marked as in progress
        formatter.unregister(obj)


def reflection_to_string(
    obj: Any,
    formatter: StructuredFormatter | None = None,
    *,
    excluded_fields: Collection[str] = (),
    exclude_none: bool = False,
) -> str:
    """Render all attributes of ``obj`` with ``formatter``."""
    buffer: Buffer = []
    walk(
        obj,
        formatter or StructuredFormatter(),
        buffer,
        excluded_fields=excluded_fields,
        exclude_none=exclude_none,
    )
    return "".join(buffer)


class ReprBuilder:
    """Fluent builder for explicit field-by-field renderings.

    Example:
        def __repr__(self) -> str:
            return (
                ReprBuilder(self, SNAPSHOT.formatter())
                .append("user", self.user)
                .append("password", self.password, full_detail=False)
                .to_string()
            )
    """

    def __init__(self, obj: Any, formatter: StructuredFormatter | None = None) -> None:
        self._obj = obj
        self._formatter = formatter or StructuredFormatter()
        self._buffer: Buffer = []
        self._formatter.append_start(self._buffer, obj)

    def append(
        self,
        field_name: str | None,
        value: Any,
        full_detail: bool | None = None,
    ) -> ReprBuilder:
        self._formatter.append(self._buffer, field_name, value, full_detail)
        return self

    def append_super(self, super_text: str | None) -> ReprBuilder:
        self._formatter.append_super(self._buffer, super_text)
        return self

    def append_to_string(self, text: str | None) -> ReprBuilder:
        self._formatter.append_to_string(self._buffer, text)
        return self

    def to_string(self) -> str:
        if self._obj is None:
            self._buffer.append(self._formatter.style.null_text)
        else:
            self._formatter.append_end(self._buffer, self._obj)
        return "".join(self._buffer)
