# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core constants shared across the workspace model and symbol index."""

from __future__ import annotations

from typing import Final

MANIFEST_SUFFIX: Final[str] = ".json"
PACKAGE_FORMAT_KEY: Final[str] = "sencha"
PACKAGE_TYPE_KEY: Final[str] = "type"

DEFAULT_SOURCE_EXTENSIONS: Final[tuple[str, ...]] = (".js",)
DEFAULT_REGISTRATION_FUNCTIONS: Final[tuple[str, ...]] = ("Ext.define",)

# Directories never descended into while walking classpath entries.
ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".sencha",
        ".svn",
        "node_modules",
        "__pycache__",
    }
)

PATH_SEPARATOR: Final[str] = ","

# Diagnostic codes raised while extracting symbols.
CODE_UNRECOGNIZED_REGISTRATION: Final[str] = "C1000"
CODE_DUPLICATE_CLASS: Final[str] = "C1001"
CODE_SYNTAX_ERROR: Final[str] = "C1002"

__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "CODE_DUPLICATE_CLASS",
    "CODE_SYNTAX_ERROR",
    "CODE_UNRECOGNIZED_REGISTRATION",
    "DEFAULT_REGISTRATION_FUNCTIONS",
    "DEFAULT_SOURCE_EXTENSIONS",
    "MANIFEST_SUFFIX",
    "PACKAGE_FORMAT_KEY",
    "PACKAGE_TYPE_KEY",
    "PATH_SEPARATOR",
]
