"""Test preset styles and preset lookup."""

from __future__ import annotations

import os
import uuid
from datetime import date, datetime, timedelta
from pathlib import PurePosixPath
from typing import Any

import pytest
from pydantic import ValidationError

from maskrepr import (
    FieldConfig,
    FieldRegistry,
    InvalidConfigurationError,
    ObfuscatingFormatter,
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
from maskrepr.core.presets import validate_preset

NL = os.linesep


class Point:
    def __init__(self) -> None:
        self.x = 1
        self.y = "a"


class Shape:
    def __init__(self) -> None:
        self.inner = Point()
        self.n = 2


def _name(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}@{id(obj):x}"


def _render(style, obj: Any) -> str:
    return ObfuscatingFormatter(FieldRegistry(), style).format(obj)


class TestPresetOutput:
    """Each preset renders the same object in its own shape."""

    def test_default(self) -> None:
        p = Point()
        assert _render(default_style(), p) == f"{_name(p)}[x=1,y=a]"

    def test_multi_line(self) -> None:
        p = Point()
        assert _render(multi_line_style(), p) == (
            f"{_name(p)}[{NL}  x=1{NL}  y=a{NL}]"
        )

    def test_no_field_names(self) -> None:
        p = Point()
        assert _render(no_field_names_style(), p) == f"{_name(p)}[1,a]"

    def test_short_prefix(self) -> None:
        assert _render(short_prefix_style(), Point()) == "Point[x=1,y=a]"

    def test_simple(self) -> None:
        assert _render(simple_style(), Point()) == "1,a"

    def test_no_class_name(self) -> None:
        assert _render(no_class_name_style(), Point()) == "[x=1,y=a]"

    def test_recursive(self) -> None:
        s = Shape()
        assert _render(recursive_style(), s) == (
            f"{_name(s)}[inner={_name(s.inner)}[x=1,y=a],n=2]"
        )

    def test_recursive_predicate_limits_descent(self) -> None:
        s = Shape()
        style = recursive_style(lambda cls: cls is not Point)
        rendered = _render(style, s)
        assert rendered.startswith(f"{_name(s)}[inner=<")
        assert "x=1" not in rendered

    def test_multi_line_recursive(self) -> None:
        s = Shape()
        assert _render(multi_line_recursive_style(), s) == (
            f"{_name(s)}[{NL}"
            f"  inner={_name(s.inner)}[{NL}"
            f"    x=1,{NL}"
            f"    y=a{NL}"
            f"  ],{NL}"
            f"  n=2{NL}"
            f"]"
        )

    def test_multi_line_recursive_collection(self) -> None:
        class Bag:
            def __init__(self) -> None:
                self.items = [1, 2]

        bag = Bag()
        style = multi_line_recursive_style().with_changes(
            use_class_name=False, use_identity_hash=False
        )
        assert _render(style, bag) == (
            f"[{NL}  items=[{NL}    1,{NL}    2{NL}  ]{NL}]"
        )

    def test_multi_line_recursive_custom_indent(self) -> None:
        style = multi_line_recursive_style(indent_width=4).with_changes(
            use_class_name=False, use_identity_hash=False
        )
        assert _render(style, Point()) == f"[{NL}    x=1,{NL}    y=a{NL}]"


class Event:
    def __init__(self) -> None:
        self.when = date(2024, 1, 2)
        self.at = datetime(2024, 1, 2, 3, 4, 5)
        self.id = uuid.UUID("12345678-1234-5678-1234-567812345678")
        self.where = PurePosixPath("/tmp/x")
        self.span = timedelta(seconds=5)


class Opaque:
    __slots__ = ()

    def __str__(self) -> str:
        return "opaque"


def _bare_recursive():
    return recursive_style().with_changes(use_class_name=False, use_identity_hash=False)


class TestRecursiveValueTypes:
    """Recursive presets keep the text of values that have nothing to walk."""

    def test_stdlib_value_types_render_as_text(self) -> None:
        assert _render(_bare_recursive(), Event()) == (
            "[when=2024-01-02,"
            "at=2024-01-02 03:04:05,"
            "id=12345678-1234-5678-1234-567812345678,"
            "where=/tmp/x,"
            "span=0:00:05]"
        )

    def test_object_without_attributes_renders_as_text(self) -> None:
        class Holder:
            def __init__(self) -> None:
                self.thing = Opaque()

        assert _render(_bare_recursive(), Holder()) == "[thing=opaque]"

    def test_registered_date_field_sees_its_value(self) -> None:
        seen: list[str] = []

        def record(text: str) -> str:
            seen.append(text)
            return "#"

        formatter = ObfuscatingFormatter(
            FieldRegistry([FieldConfig("when", record)]), _bare_recursive()
        )
        rendered = formatter.format(Event())

        assert rendered.startswith("[when=#,at=2024-01-02 03:04:05,")
        assert seen == ["2024-01-02"]

    def test_multi_line_recursive_keeps_date_on_one_line(self) -> None:
        class Stamp:
            def __init__(self) -> None:
                self.when = date(2024, 1, 2)

        style = multi_line_recursive_style().with_changes(
            use_class_name=False, use_identity_hash=False
        )
        assert _render(style, Stamp()) == f"[{NL}  when=2024-01-02{NL}]"


class TestPresetValidation:
    """Test preset lookup and argument validation."""

    def test_list_presets_is_sorted(self) -> None:
        assert list_presets() == [
            "default",
            "multi_line",
            "multi_line_recursive",
            "no_class_name",
            "no_field_names",
            "recursive",
            "short_prefix",
            "simple",
        ]

    @pytest.mark.parametrize("name", ["default", "simple", "multi_line_recursive"])
    def test_get_preset_returns_style(self, name: str) -> None:
        assert get_preset(name) is not None

    def test_get_preset_applies_indent_width_to_indenting_presets(self) -> None:
        assert get_preset("multi_line_recursive", indent_width=4).indent_width == 4

    def test_get_preset_ignores_indent_width_elsewhere(self) -> None:
        assert get_preset("default", indent_width=4) == default_style()

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Invalid preset 'fancy'"):
            get_preset("fancy")

    def test_validate_preset_lists_valid_names(self) -> None:
        with pytest.raises(InvalidConfigurationError) as excinfo:
            validate_preset("nope")
        assert "multi_line_recursive" in str(excinfo.value)

    def test_indent_width_must_be_positive(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            multi_line_recursive_style(indent_width=0)

    def test_recurse_predicate_must_be_callable(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            recursive_style("always")  # type: ignore[arg-type]

    def test_styles_are_immutable(self) -> None:
        style = default_style()
        with pytest.raises(ValidationError):
            style.null_text = "null"  # type: ignore[misc]
