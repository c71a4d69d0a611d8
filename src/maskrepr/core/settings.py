"""
Configuration models for maskrepr using Pydantic v2 Settings.

Every value can be supplied through ``MASKREPR_``-prefixed environment
variables, using ``__`` for nesting (``MASKREPR_STYLE__PRESET=multi_line``).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .presets import DEFAULT_INDENT_WIDTH, list_presets


class CoreSettings(BaseModel):
    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit DEBUG/WARN diagnostics on the 'maskrepr' logger",
    )


class StyleSettings(BaseModel):
    """Style used by builders created without an explicit style."""

    preset: str = Field(default="default", description="Preset name")
    indent_width: int = Field(
        default=DEFAULT_INDENT_WIDTH,
        ge=1,
        description="Indent width for multi-line recursive rendering",
    )

    @field_validator("preset")
    @classmethod
    def _ensure_known_preset(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in list_presets():
            raise ValueError(
                f"Unknown preset '{value}'. Valid presets: {', '.join(list_presets())}"
            )
        return value


class FieldSettings(BaseModel):
    """Builder-wide defaults applied to newly registered fields."""

    case_sensitive_by_default: bool = Field(
        default=True, description="Match field names case-sensitively"
    )
    include_summaries_by_default: bool = Field(
        default=False, description="Also obfuscate summary renderings"
    )


class Settings(BaseSettings):
    """Top-level configuration model."""

    core: CoreSettings = Field(default_factory=CoreSettings)
    style: StyleSettings = Field(default_factory=StyleSettings)
    field_defaults: FieldSettings = Field(default_factory=FieldSettings)

    model_config = SettingsConfigDict(
        env_prefix="MASKREPR_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )
