"""
Integration tests: obfuscated renderings flowing through stdlib logging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from maskrepr import builder, fixed_length, no_class_name_style, portion
from maskrepr.testing import assert_no_leak

pytestmark = pytest.mark.integration

SNAPSHOT = (
    builder(no_class_name_style())
    .with_field("password", fixed_length(3))
    .with_field("card", portion(keep_at_end=4))
    .snapshot()
)


class Account:
    __repr__ = SNAPSHOT.as_repr()

    def __init__(self) -> None:
        self.user = "alice"
        self.password = "hunter2"
        self.card = "4111111111111111"


@dataclass
class Order:
    account: Account
    items: list = field(default_factory=list)


def test_as_repr_backs_class_repr() -> None:
    text = repr(Account())
    assert text == "[user=alice,password=***,card=************1111]"
    assert_no_leak(text, ["hunter2", "4111111111111111"])


def test_nested_object_uses_its_own_repr() -> None:
    order = Order(Account(), ["book"])
    assert SNAPSHOT.format(order) == (
        "[account=[user=alice,password=***,card=************1111],items=[book]]"
    )


def test_lazy_repr_in_log_record(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("app.accounts")
    with caplog.at_level(logging.INFO, logger="app.accounts"):
        log.info("login %s", SNAPSHOT.lazy(Account()))

    assert caplog.messages == [
        "login [user=alice,password=***,card=************1111]"
    ]
    assert_no_leak(caplog.text, ["hunter2"])


def test_lazy_repr_not_rendered_when_level_disabled(
    caplog: pytest.LogCaptureFixture,
) -> None:
    rendered: list[str] = []

    def record(text: str) -> str:
        rendered.append(text)
        return "***"

    snap = builder(no_class_name_style()).with_field("password", record).snapshot()
    log = logging.getLogger("app.quiet")
    with caplog.at_level(logging.WARNING, logger="app.quiet"):
        log.debug("login %s", snap.lazy(Account()))

    assert rendered == []
    assert caplog.records == []
