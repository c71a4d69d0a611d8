"""
Testing utilities for code that renders sensitive objects.

Example:
    from maskrepr.testing import assert_no_leak

    def test_account_repr_hides_password():
        assert_no_leak(repr(account), [account.password])
"""

from .validators import (
    LeakDetectedError,
    ValidationResult,
    assert_no_leak,
    validate_no_leak,
)

__all__ = [
    "LeakDetectedError",
    "ValidationResult",
    "assert_no_leak",
    "validate_no_leak",
]
