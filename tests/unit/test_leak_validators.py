"""Tests for maskrepr.testing leak validators."""

from __future__ import annotations

import pytest

from maskrepr import builder, fixed_length, no_class_name_style
from maskrepr.testing import LeakDetectedError, assert_no_leak, validate_no_leak


class Account:
    def __init__(self) -> None:
        self.user = "alice"
        self.password = "hunter2"


class TestValidateNoLeak:
    def test_clean_text_is_valid(self) -> None:
        result = validate_no_leak("[user=alice,password=***]", ["hunter2"])
        assert result.valid
        assert result.checked == 1
        assert result.errors == []

    def test_leak_is_reported_without_echoing_secret(self) -> None:
        result = validate_no_leak("[password=hunter2]", ["hunter2"])
        assert not result.valid
        assert len(result.errors) == 1
        assert "hunter2" not in result.errors[0]

    def test_empty_secrets_are_ignored(self) -> None:
        result = validate_no_leak("anything", ["", ""])
        assert result.valid
        assert result.checked == 0

    def test_non_string_secrets_are_compared_as_text(self) -> None:
        assert not validate_no_leak("[pin=1234]", [1234]).valid


class TestAssertNoLeak:
    @pytest.mark.security
    def test_obfuscated_rendering_passes(self) -> None:
        snap = (
            builder(no_class_name_style())
            .with_field("password", fixed_length(3))
            .snapshot()
        )
        assert_no_leak(snap.format(Account()), ["hunter2"])

    def test_unobfuscated_rendering_fails(self) -> None:
        snap = builder(no_class_name_style()).snapshot()
        with pytest.raises(LeakDetectedError, match="Rendered text leaks"):
            assert_no_leak(snap.format(Account()), ["hunter2"])

    def test_leak_error_is_assertion_error(self) -> None:
        assert issubclass(LeakDetectedError, AssertionError)
