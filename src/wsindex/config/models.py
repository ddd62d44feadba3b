# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and errors for the workspace index."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_REGISTRATION_FUNCTIONS, DEFAULT_SOURCE_EXTENSIONS
from ..severity import Severity


class ConfigError(Exception):
    """Raised when the project tree or configuration input is inconsistent."""


class PathMode(str, Enum):
    """Enumerate how file paths are rendered in diagnostic text."""

    ABSOLUTE = "abs"
    RELATIVE = "rel"


class SourcesConfig(BaseModel):
    """Settings controlling which files a classpath contributes."""

    model_config = ConfigDict(validate_assignment=True)

    extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalise_extensions(cls, value: Any) -> Any:
        """Accept ``"js"`` and ``".js"`` alike and lower-case every entry."""
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return tuple(
                entry if str(entry).startswith(".") else f".{entry}"
                for entry in (str(item).strip().lower() for item in value)
                if entry
            )
        return value


class SymbolsConfig(BaseModel):
    """Settings controlling class-registration extraction."""

    model_config = ConfigDict(validate_assignment=True)

    registration_functions: tuple[str, ...] = DEFAULT_REGISTRATION_FUNCTIONS


class DiagnosticsConfig(BaseModel):
    """Severity overrides and emission thresholds for content diagnostics."""

    model_config = ConfigDict(validate_assignment=True)

    threshold: Severity = Severity.WARN
    levels: dict[str, Severity] = Field(default_factory=dict)
    thresholds: dict[str, Severity] = Field(default_factory=dict)
    path_mode: PathMode = PathMode.ABSOLUTE


class IndexConfig(BaseModel):
    """Top-level configuration for a workspace index session."""

    model_config = ConfigDict(validate_assignment=True)

    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    symbols: SymbolsConfig = Field(default_factory=SymbolsConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dictionary of the configuration."""
        return self.model_dump(mode="json")


__all__ = [
    "ConfigError",
    "DiagnosticsConfig",
    "IndexConfig",
    "PathMode",
    "SourcesConfig",
    "SymbolsConfig",
]
