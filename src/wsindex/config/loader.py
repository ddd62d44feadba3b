# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from .models import ConfigError, IndexConfig

CONFIG_FILENAME: Final[str] = ".wsindex.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "wsindex"


class ConfigSource(Protocol):
    """A named provider of raw configuration fragments."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration fragment supplied by the source."""
        ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return IndexConfig().to_dict()


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            with self._path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc}") from exc


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.wsindex]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


class MappingConfigSource:
    """Expose an in-memory mapping, typically explicit caller overrides."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = data
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return self._data


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence.

    Later sources override earlier ones key by key; nested tables are merged
    rather than replaced.
    """

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, root: Path, *, overrides: Mapping[str, Any] | None = None) -> ConfigLoader:
        """Build a loader reading defaults, ``pyproject.toml`` and ``.wsindex.toml`` under ``root``.

        Args:
            root: Workspace root used to discover configuration files.
            overrides: Optional explicit values applied last.

        Returns:
            ConfigLoader: Loader configured with the default precedence ordering.
        """
        resolved = root.resolve()
        pyproject = resolved / PYPROJECT_FILENAME
        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(pyproject, name=str(pyproject)),
            TomlConfigSource(resolved / CONFIG_FILENAME),
        ]
        if overrides:
            sources.append(MappingConfigSource(overrides))
        return cls(sources)

    def load(self) -> IndexConfig:
        """Merge every source and validate the result.

        Returns:
            IndexConfig: Validated configuration.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """
        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if not isinstance(fragment, Mapping):
                raise ConfigError(f"Configuration from {source.name} must be a table")
            merged = _deep_merge(merged, fragment)
        try:
            return IndexConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(root: Path, *, overrides: Mapping[str, Any] | None = None) -> IndexConfig:
    """Return the configuration in effect for the workspace rooted at ``root``."""
    return ConfigLoader.for_root(root, overrides=overrides).load()


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
