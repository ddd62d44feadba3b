# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models, layered loading and the manifest property map."""

from __future__ import annotations

from .loader import CONFIG_FILENAME, ConfigLoader, load_config
from .models import (
    ConfigError,
    DiagnosticsConfig,
    IndexConfig,
    PathMode,
    SourcesConfig,
    SymbolsConfig,
)
from .properties import ListRule, PropertyMap

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigLoader",
    "DiagnosticsConfig",
    "IndexConfig",
    "ListRule",
    "PathMode",
    "PropertyMap",
    "SourcesConfig",
    "SymbolsConfig",
    "load_config",
]
