"""
Obfuscating formatter: intercepts every value emitter of
``StructuredFormatter`` and splices obfuscated text in place of registered
fields.

For a registered field the emitted span is captured from the buffer,
passed to the field's transform, removed, and replaced with the transform's
output. A single ``obfuscating`` flag marks that a span is open; emitters
called while it is set (nested values, collection items, recursively walked
objects) write straight into the open span and are obfuscated once, as part
of the outermost field.

Example:
    formatter = ObfuscatingFormatter(
        FieldRegistry([FieldConfig("password", fixed_length(3))]),
        no_class_name_style(),
    )
    formatter.format(account)  # "[user=alice,password=***]"
"""

from __future__ import annotations

import os
from typing import Any, Callable, Collection, Literal, Mapping

from . import diagnostics
from .errors import InvalidConfigurationError, ObfuscationTransformError
from .formatter import Buffer, StructuredFormatter, is_scalar
from .registry import FieldConfig, FieldRegistry
from .styles import FormatStyle
from .walker import field_names, walk

Emit = Callable[[Buffer], None]

# "outermost": only the outermost registered field in a span is obfuscated.
# "independent": registered fields nested inside an open span are obfuscated
# on their own first, then the outer transform runs over the result.
NestedPolicy = Literal["outermost", "independent"]


class ObfuscatingFormatter(StructuredFormatter):
    """A ``StructuredFormatter`` that obfuscates registered fields.

    Not thread safe and meant for one render at a time; obtain a fresh
    instance per render from a builder or ``Snapshot``.
    """

    def __init__(
        self,
        registry: FieldRegistry,
        style: FormatStyle | None = None,
        *,
        nested_policy: NestedPolicy = "outermost",
    ) -> None:
        if nested_policy not in ("outermost", "independent"):
            raise InvalidConfigurationError(
                f"Unknown nested policy '{nested_policy}'", nested_policy=nested_policy
            )
        super().__init__(style)
        self._registry = registry
        self._nested_policy = nested_policy
        self._obfuscating = False
        self._open_spans: list[FieldConfig] = []
        self._indent_level = 0
        if self.style.indent_width:
            self._set_indent(1)

    @property
    def registry(self) -> FieldRegistry:
        return self._registry

    @property
    def obfuscating(self) -> bool:
        return self._obfuscating

    def format(
        self,
        obj: Any,
        *,
        excluded_fields: Collection[str] = (),
        exclude_none: bool = False,
    ) -> str:
        """Render all attributes of ``obj``."""
        buffer: Buffer = []
        walk(
            obj,
            self,
            buffer,
            excluded_fields=excluded_fields,
            exclude_none=exclude_none,
        )
        return "".join(buffer)

    # Splice

    def _config_for(self, field_name: str | None, summary: bool) -> FieldConfig | None:
        if field_name is None or not self._registry:
            return None
        config = self._registry.lookup(field_name)
        if config is None or (summary and not config.include_summary):
            return None
        return config

    def intercepted_append(
        self,
        buffer: Buffer,
        field_name: str | None,
        emit: Emit,
        *,
        summary: bool = False,
    ) -> None:
        if self._obfuscating:
            # Already inside an obfuscated span; text belongs to that span
            if self._nested_policy == "independent":
                config = self._config_for(field_name, summary)
                if config is not None and not any(
                    config is open_config for open_config in self._open_spans
                ):
                    self._splice(buffer, config, emit)
                    return
            emit(buffer)
            return

        config = self._config_for(field_name, summary)
        if config is None:
            emit(buffer)
            return

        self._obfuscating = True
        try:
            self._splice(buffer, config, emit)
        finally:
            self._obfuscating = False

    def _splice(self, buffer: Buffer, config: FieldConfig, emit: Emit) -> None:
        start = len(buffer)
        self._open_spans.append(config)
        try:
            emit(buffer)
        except BaseException:
            # Never leave a partially rendered, unobfuscated span behind
            del buffer[min(start, len(buffer)) :]
            raise
        finally:
            self._open_spans.pop()
        start = min(start, len(buffer))
        captured = "".join(buffer[start:])
        del buffer[start:]
        try:
            masked = config.obfuscate(captured)
        except Exception as exc:
            diagnostics.warn(
                "interceptor",
                "obfuscation transform failed",
                field=config.name,
                reason=type(exc).__name__,
            )
            raise ObfuscationTransformError(config.name, exc) from exc
        buffer.append(str(masked))

    # Recursive descent

    def should_recurse_into(self, value: Any) -> bool:
        predicate = self.style.recurse_into
        if predicate is None or is_scalar(value):
            return False
        if not predicate(type(value)):
            return False
        # Nothing to walk: keep the str() rendering instead of an empty shell
        return bool(field_names(value))

    def _set_indent(self, level: int) -> None:
        self._indent_level = level
        line = os.linesep
        inner = " " * (self.style.indent_width * level)
        outer = " " * (self.style.indent_width * (level - 1))
        self._array_start = self.style.array_start + line + inner
        self._array_separator = self.style.array_separator + line + inner
        self._array_end = line + outer + self.style.array_end
        self._content_start = self.style.content_start + line + inner
        self._field_separator = self.style.field_separator + line + inner
        self._content_end = line + outer + self.style.content_end

    def _descend(self, append: Callable[[], None]) -> None:
        if not self.style.indent_width:
            append()
            return
        self._set_indent(self._indent_level + 1)
        try:
            append()
        finally:
            self._set_indent(self._indent_level - 1)

    # Intercepted emitters

    def append_detail(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        if self.should_recurse_into(value):
            self._descend(
                lambda: self.intercepted_append(
                    buffer, field_name, lambda b: walk(value, self, b)
                )
            )
            return
        parent = super().append_detail
        self.intercepted_append(buffer, field_name, lambda b: parent(b, field_name, value))

    def append_summary(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        parent = super().append_summary
        self.intercepted_append(
            buffer, field_name, lambda b: parent(b, field_name, value), summary=True
        )

    def append_summary_size(self, buffer: Buffer, field_name: str | None, size: int) -> None:
        parent = super().append_summary_size
        self.intercepted_append(
            buffer, field_name, lambda b: parent(b, field_name, size), summary=True
        )

    def append_null_text(self, buffer: Buffer, field_name: str | None) -> None:
        parent = super().append_null_text
        self.intercepted_append(buffer, field_name, lambda b: parent(b, field_name))

    def append_cyclic_object(self, buffer: Buffer, field_name: str | None, value: Any) -> None:
        parent = super().append_cyclic_object
        self.intercepted_append(buffer, field_name, lambda b: parent(b, field_name, value))

    def append_array_detail(self, buffer: Buffer, field_name: str | None, values: Any) -> None:
        parent = super().append_array_detail
        self._descend(
            lambda: self.intercepted_append(
                buffer, field_name, lambda b: parent(b, field_name, values)
            )
        )

    def append_collection_detail(
        self, buffer: Buffer, field_name: str | None, values: Collection[Any]
    ) -> None:
        # Rendered like arrays so the whole collection is one contiguous span
        def emit(b: Buffer) -> None:
            b.append(self._array_start.replace("{", "["))
            for index, item in enumerate(values):
                if index:
                    b.append(self._array_separator)
                self.append_item(b, field_name, item)
            b.append(self._array_end.replace("}", "]"))

        self._descend(lambda: self.intercepted_append(buffer, field_name, emit))

    def append_map_detail(
        self, buffer: Buffer, field_name: str | None, mapping: Mapping[Any, Any]
    ) -> None:
        def emit(b: Buffer) -> None:
            b.append(self._array_start)
            for index, (key, value) in enumerate(mapping.items()):
                if index:
                    b.append(self._array_separator)
                # Keys are rendered plainly; complex keys would be unreadable
                if key is None:
                    self.append_null_text(b, field_name)
                else:
                    b.append(str(key))
                b.append("=")
                self.append_item(b, field_name, value)
            b.append(self._array_end)

        self._descend(lambda: self.intercepted_append(buffer, field_name, emit))
