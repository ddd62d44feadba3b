# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace, app and package descriptors."""

from __future__ import annotations

from .context import Context
from .kinds import KIND_SPECS, LOAD_ORDER, PACKAGE_FAMILY, PACKAGE_TYPES, ContextKind, KindSpec
from .manifest import read_manifest, strip_json_comments

__all__ = [
    "KIND_SPECS",
    "LOAD_ORDER",
    "PACKAGE_FAMILY",
    "PACKAGE_TYPES",
    "Context",
    "ContextKind",
    "KindSpec",
    "read_manifest",
    "strip_json_comments",
]
