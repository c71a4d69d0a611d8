"""
Decoration settings for rendered objects.

A ``FormatStyle`` is an immutable bag of decoration strings and flags. Named
presets in ``presets.py`` only differ in the values set here.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

RecursePredicate = Callable[[type], bool]


class FormatStyle(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    # Object prefix
    use_class_name: bool = Field(default=True, description="Prefix with class name")
    use_short_class_name: bool = Field(
        default=False, description="Use qualname only, without module"
    )
    use_identity_hash: bool = Field(
        default=True, description="Append @<hex id> after the class name"
    )

    # Fields
    use_field_names: bool = True
    content_start: str = "["
    content_end: str = "]"
    field_name_value_separator: str = "="
    field_separator: str = ","
    field_separator_at_start: bool = False
    field_separator_at_end: bool = False

    # Arrays (tuples); collections and mappings reuse these with [] for lists
    array_start: str = "{"
    array_end: str = "}"
    array_separator: str = ","
    array_content_detail: bool = True

    default_full_detail: bool = True
    null_text: str = "<null>"
    size_start: str = "<size="
    size_end: str = ">"
    summary_object_start: str = "<"
    summary_object_end: str = ">"

    recurse_into: RecursePredicate | None = Field(
        default=None,
        description="Predicate over a value's type; None disables recursion",
    )
    indent_width: int = Field(
        default=0,
        ge=0,
        description="Spaces per nesting level for multi-line recursion (0 = off)",
    )

    @property
    def recursive(self) -> bool:
        return self.recurse_into is not None

    def with_changes(self, **changes: Any) -> FormatStyle:
        """Return a validated copy with ``changes`` applied."""
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self)(**data)
