"""Fluent builder API for configuring obfuscating formatters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Collection

from .core import diagnostics
from .core.errors import DuplicateFieldError, InvalidConfigurationError
from .core.interceptor import NestedPolicy, ObfuscatingFormatter
from .core.presets import get_preset
from .core.registry import CaseSensitivity, FieldConfig, FieldRegistry, TextTransform
from .core.settings import Settings
from .core.styles import FormatStyle


@dataclass
class _PendingField:
    """The field currently being configured; committed exactly once."""

    name: str
    obfuscate: TextTransform
    case_sensitivity: CaseSensitivity
    include_summary: bool

    def freeze(self) -> FieldConfig:
        return FieldConfig(
            name=self.name,
            obfuscate=self.obfuscate,
            case_sensitivity=self.case_sensitivity,
            include_summary=self.include_summary,
        )


class ObfuscatingFormatterBuilder:
    """Fluent builder for obfuscating formatters.

    Fields are registered with ``with_field``; builder-wide defaults only
    affect fields registered after they change. ``build()`` returns a new
    single-use formatter, ``snapshot()`` an immutable capture that can
    produce formatters on demand from any thread.

    ``formatter_class`` is instantiated by ``build()`` and by snapshots as
    ``formatter_class(registry, style, nested_policy=...)``; subclasses of
    ``ObfuscatingFormatter`` can override emitters or add decorations.

    The builder itself is not thread safe.
    """

    def __init__(
        self,
        style: FormatStyle | None = None,
        *,
        settings: Settings | None = None,
        nested_policy: NestedPolicy = "outermost",
        formatter_class: type[ObfuscatingFormatter] = ObfuscatingFormatter,
    ) -> None:
        cfg = settings or Settings()
        if style is None:
            style = get_preset(cfg.style.preset, indent_width=cfg.style.indent_width)
        elif not isinstance(style, FormatStyle):
            raise InvalidConfigurationError(
                "style must be a FormatStyle", style_type=type(style).__name__
            )
        if nested_policy not in ("outermost", "independent"):
            raise InvalidConfigurationError(
                f"Unknown nested policy '{nested_policy}'", nested_policy=nested_policy
            )
        if not (
            isinstance(formatter_class, type)
            and issubclass(formatter_class, ObfuscatingFormatter)
        ):
            raise InvalidConfigurationError(
                "formatter_class must be an ObfuscatingFormatter subclass",
                formatter_class=repr(formatter_class),
            )
        self._style = style
        self._nested_policy: NestedPolicy = nested_policy
        self._formatter_class = formatter_class
        self._fields: list[FieldConfig] = []
        self._keys: set[tuple[str, CaseSensitivity]] = set()
        self._pending: _PendingField | None = None
        self._case_sensitivity = (
            CaseSensitivity.SENSITIVE
            if cfg.field_defaults.case_sensitive_by_default
            else CaseSensitivity.INSENSITIVE
        )
        self._include_summaries = cfg.field_defaults.include_summaries_by_default

    @property
    def style(self) -> FormatStyle:
        return self._style

    def with_style(self, style: FormatStyle) -> ObfuscatingFormatterBuilder:
        """Replace the style used by formatters built from now on."""
        if not isinstance(style, FormatStyle):
            raise InvalidConfigurationError(
                "style must be a FormatStyle", style_type=type(style).__name__
            )
        self._style = style
        return self

    def with_field(
        self,
        name: str,
        obfuscate: TextTransform,
        case_sensitivity: CaseSensitivity | None = None,
    ) -> FieldConfigurer:
        """Register obfuscation for ``name``.

        Raises:
            InvalidConfigurationError: If the name is empty or the transform
                is not callable
            DuplicateFieldError: If ``name`` is already registered with the
                same case sensitivity
        """
        if not isinstance(name, str) or not name:
            raise InvalidConfigurationError("Field name must be a non-empty string")
        if not callable(obfuscate):
            raise InvalidConfigurationError(
                f"Obfuscation transform for field '{name}' must be callable",
                field=name,
            )
        mode = case_sensitivity or self._case_sensitivity
        if not isinstance(mode, CaseSensitivity):
            raise InvalidConfigurationError(
                "case_sensitivity must be a CaseSensitivity", field=name
            )

        self._commit_pending()
        key = (mode.normalize(name), mode)
        if key in self._keys:
            diagnostics.debug(
                "builder", "duplicate field registration", field=name, mode=mode.value
            )
            raise DuplicateFieldError(name, mode)

        pending = _PendingField(
            name=name,
            obfuscate=obfuscate,
            case_sensitivity=mode,
            include_summary=self._include_summaries,
        )
        self._keys.add(key)
        self._pending = pending
        return FieldConfigurer(self, pending)

    def case_sensitive_by_default(self) -> ObfuscatingFormatterBuilder:
        self._case_sensitivity = CaseSensitivity.SENSITIVE
        return self

    def case_insensitive_by_default(self) -> ObfuscatingFormatterBuilder:
        self._case_sensitivity = CaseSensitivity.INSENSITIVE
        return self

    def include_summaries_by_default(self) -> ObfuscatingFormatterBuilder:
        self._include_summaries = True
        return self

    def exclude_summaries_by_default(self) -> ObfuscatingFormatterBuilder:
        self._include_summaries = False
        return self

    def _commit_pending(self) -> None:
        if self._pending is not None:
            self._fields.append(self._pending.freeze())
            self._pending = None

    def _is_pending(self, pending: _PendingField) -> bool:
        return self._pending is pending

    def registry(self) -> FieldRegistry:
        """Commit the pending field and return an immutable registry."""
        self._commit_pending()
        return FieldRegistry(self._fields)

    def snapshot(self) -> Snapshot:
        """Capture the current settings; later builder changes do not affect it."""
        return Snapshot(
            registry=self.registry(),
            style=self._style,
            case_sensitivity=self._case_sensitivity,
            include_summaries=self._include_summaries,
            nested_policy=self._nested_policy,
            formatter_class=self._formatter_class,
        )

    def build(self) -> ObfuscatingFormatter:
        """Return a new formatter for a single render."""
        return self._formatter_class(
            self.registry(), self._style, nested_policy=self._nested_policy
        )

    def transform(self, f: Callable[[ObfuscatingFormatterBuilder], Any]) -> Any:
        """Apply ``f`` to this builder and return its result."""
        return f(self)


class FieldConfigurer:
    """Field-scoped view returned by ``with_field``.

    Overrides summary inclusion for the field just registered and forwards
    everything else to the builder. Using it after another field has been
    started (or after build/snapshot) raises ``InvalidConfigurationError``.
    """

    def __init__(self, builder: ObfuscatingFormatterBuilder, pending: _PendingField) -> None:
        self._builder = builder
        self._pending = pending

    def _check_pending(self) -> _PendingField:
        if not self._builder._is_pending(self._pending):
            raise InvalidConfigurationError(
                f"Field '{self._pending.name}' is already committed",
                field=self._pending.name,
            )
        return self._pending

    def include_summaries(self) -> FieldConfigurer:
        self._check_pending().include_summary = True
        return self

    def exclude_summaries(self) -> FieldConfigurer:
        self._check_pending().include_summary = False
        return self

    # Forwarded to the builder

    def with_field(
        self,
        name: str,
        obfuscate: TextTransform,
        case_sensitivity: CaseSensitivity | None = None,
    ) -> FieldConfigurer:
        return self._builder.with_field(name, obfuscate, case_sensitivity)

    def case_sensitive_by_default(self) -> ObfuscatingFormatterBuilder:
        return self._builder.case_sensitive_by_default()

    def case_insensitive_by_default(self) -> ObfuscatingFormatterBuilder:
        return self._builder.case_insensitive_by_default()

    def include_summaries_by_default(self) -> ObfuscatingFormatterBuilder:
        return self._builder.include_summaries_by_default()

    def exclude_summaries_by_default(self) -> ObfuscatingFormatterBuilder:
        return self._builder.exclude_summaries_by_default()

    def snapshot(self) -> Snapshot:
        return self._builder.snapshot()

    def build(self) -> ObfuscatingFormatter:
        return self._builder.build()

    def end(self) -> ObfuscatingFormatterBuilder:
        """Return the owning builder."""
        return self._builder


@dataclass(frozen=True)
class Snapshot:
    """Immutable capture of builder settings.

    Safe to share across threads; every ``formatter()`` call returns a fresh
    formatter, so a module-level snapshot can back ``__repr__`` methods:

        _REPR = builder().with_field("password", fixed_length(3)).snapshot()

        class Account:
            __repr__ = _REPR.as_repr()
    """

    registry: FieldRegistry
    style: FormatStyle
    case_sensitivity: CaseSensitivity = CaseSensitivity.SENSITIVE
    include_summaries: bool = False
    nested_policy: NestedPolicy = "outermost"
    formatter_class: type[ObfuscatingFormatter] = ObfuscatingFormatter

    @property
    def fields(self) -> tuple[FieldConfig, ...]:
        return self.registry.fields

    def formatter(self) -> ObfuscatingFormatter:
        return self.formatter_class(
            self.registry, self.style, nested_policy=self.nested_policy
        )

    def format(
        self,
        obj: Any,
        *,
        excluded_fields: Collection[str] = (),
        exclude_none: bool = False,
    ) -> str:
        return self.formatter().format(
            obj, excluded_fields=excluded_fields, exclude_none=exclude_none
        )

    def lazy(self, obj: Any) -> LazyRepr:
        """Defer rendering until the result is converted to text.

        Useful as a logging argument: ``log.debug("%s", snap.lazy(obj))``.
        """
        return LazyRepr(self, obj)

    def as_repr(self) -> Callable[[Any], str]:
        """Return a function usable as a class's ``__repr__``."""
        snapshot = self

        def __repr__(obj: Any) -> str:
            return snapshot.format(obj)

        return __repr__


class LazyRepr:
    __slots__ = ("_snapshot", "_obj")

    def __init__(self, snapshot: Snapshot, obj: Any) -> None:
        self._snapshot = snapshot
        self._obj = obj

    def __str__(self) -> str:
        return self._snapshot.format(self._obj)

    __repr__ = __str__


def builder(
    style: FormatStyle | None = None,
    *,
    settings: Settings | None = None,
    nested_policy: NestedPolicy = "outermost",
    formatter_class: type[ObfuscatingFormatter] = ObfuscatingFormatter,
) -> ObfuscatingFormatterBuilder:
    """Start configuring an obfuscating formatter."""
    return ObfuscatingFormatterBuilder(
        style,
        settings=settings,
        nested_policy=nested_policy,
        formatter_class=formatter_class,
    )
