# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers: path normalisation, upward search and source walking."""

from __future__ import annotations

from .paths import (
    absolutize,
    canonical_key,
    display_relative_path,
    distinct_existing,
    find_upwards,
    relative_posix,
    split_path_list,
)
from .walk import list_subdirectories, walk_files

__all__ = [
    "absolutize",
    "canonical_key",
    "display_relative_path",
    "distinct_existing",
    "find_upwards",
    "list_subdirectories",
    "relative_posix",
    "split_path_list",
    "walk_files",
]
