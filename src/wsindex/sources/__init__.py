# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source loading: lazily parsed file handles gathered from contexts."""

from __future__ import annotations

from .files import SourceFile, SourceFileList
from .loader import Sources

__all__ = ["SourceFile", "SourceFileList", "Sources"]
