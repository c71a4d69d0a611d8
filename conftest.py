"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "security: Security-critical tests (no unobfuscated text may leak)",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests exercising maskrepr together with stdlib logging or threads",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_cache() -> Generator[None, None, None]:
    """Reset the diagnostics module cache before each test.

    The diagnostics module caches the `internal_logging_enabled` setting at
    first access. Resetting it keeps tests from inheriting cached state.
    """
    import maskrepr.core.diagnostics as diag

    diag._internal_logging_enabled = None
    yield
    diag._internal_logging_enabled = None


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove MASKREPR_* variables so Settings() sees only defaults."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("MASKREPR_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
