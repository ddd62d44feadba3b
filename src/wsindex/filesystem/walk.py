# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deterministic, extension-filtered directory traversal."""

from __future__ import annotations

import os
from collections.abc import Collection, Iterator
from pathlib import Path

from ..constants import ALWAYS_EXCLUDE_DIRS


def walk_files(
    base: Path,
    extensions: Collection[str],
    *,
    exclude_dirs: Collection[str] = ALWAYS_EXCLUDE_DIRS,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield files below ``base`` whose suffix is in ``extensions``.

    The walk is depth-first and top-down. Within a directory, files are
    yielded in name order before descending into subdirectories, which are
    also visited in name order, so the result is stable across platforms.

    Args:
        base: Directory to traverse.
        extensions: Lower-case suffixes including the dot, e.g. ``".js"``.
        exclude_dirs: Directory names never descended into.
        follow_symlinks: When ``True`` walk directories pointed to by symlinks.

    Yields:
        Path: Absolute paths of matching files.
    """

    wanted = {ext.lower() for ext in extensions}
    for dirpath, dirnames, filenames in os.walk(base, followlinks=follow_symlinks):
        dirnames[:] = sorted(name for name in dirnames if name not in exclude_dirs)
        current = Path(dirpath)
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1].lower() in wanted:
                yield current / filename


def list_subdirectories(base: Path) -> list[Path]:
    """Return the immediate subdirectories of ``base`` in name order."""

    try:
        entries = sorted(os.scandir(base), key=lambda entry: entry.name)
    except OSError:
        return []
    return [Path(entry.path) for entry in entries if entry.is_dir() and entry.name not in ALWAYS_EXCLUDE_DIRS]


__all__ = ["list_subdirectories", "walk_files"]
