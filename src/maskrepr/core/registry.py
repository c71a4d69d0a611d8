"""
Immutable registry of obfuscated fields.

Entries are keyed by ``(name, case_sensitivity)``. Case-insensitive entries
are stored under their ``casefold()`` form. A name may be registered once per
mode, so a case-sensitive and a case-insensitive entry for the same name can
coexist; lookups prefer the exact case-sensitive entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping

from .errors import DuplicateFieldError

TextTransform = Callable[[str], str]


class CaseSensitivity(str, Enum):
    SENSITIVE = "case_sensitive"
    INSENSITIVE = "case_insensitive"

    def normalize(self, name: str) -> str:
        return name if self is CaseSensitivity.SENSITIVE else name.casefold()


@dataclass(frozen=True)
class FieldConfig:
    """Obfuscation settings for one registered field name."""

    name: str
    obfuscate: TextTransform
    case_sensitivity: CaseSensitivity = CaseSensitivity.SENSITIVE
    include_summary: bool = False

    @property
    def key(self) -> tuple[str, CaseSensitivity]:
        return (self.case_sensitivity.normalize(self.name), self.case_sensitivity)


class FieldRegistry:
    """Read-only lookup from field name to ``FieldConfig``.

    Safe to share between threads and formatter instances.
    """

    __slots__ = ("_fields", "_sensitive", "_insensitive")

    def __init__(self, fields: Iterable[FieldConfig] = ()) -> None:
        sensitive: dict[str, FieldConfig] = {}
        insensitive: dict[str, FieldConfig] = {}
        ordered: list[FieldConfig] = []
        for config in fields:
            name, mode = config.key
            table = sensitive if mode is CaseSensitivity.SENSITIVE else insensitive
            if name in table:
                raise DuplicateFieldError(config.name, mode)
            table[name] = config
            ordered.append(config)
        self._fields: tuple[FieldConfig, ...] = tuple(ordered)
        self._sensitive: Mapping[str, FieldConfig] = MappingProxyType(sensitive)
        self._insensitive: Mapping[str, FieldConfig] = MappingProxyType(insensitive)

    def lookup(self, name: str) -> FieldConfig | None:
        config = self._sensitive.get(name)
        if config is None and self._insensitive:
            config = self._insensitive.get(name.casefold())
        return config

    @property
    def fields(self) -> tuple[FieldConfig, ...]:
        return self._fields

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[FieldConfig]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __bool__(self) -> bool:
        return bool(self._fields)

    def __repr__(self) -> str:
        names = ", ".join(
            f"{c.name}({c.case_sensitivity.value})" for c in self._fields
        )
        return f"FieldRegistry([{names}])"
