# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from os import PathLike
from pathlib import Path, PurePosixPath

from ..constants import PATH_SEPARATOR

_Pathish = str | PathLike[str] | Path


def absolutize(path: _Pathish, *, base_dir: _Pathish | None = None) -> Path:
    """Return ``path`` as an absolute, normalised path.

    Args:
        path: Filesystem path supplied by the caller.
        base_dir: Directory relative paths are resolved against. Defaults to
            ``Path.cwd()`` when omitted.

    Returns:
        Path: Resolved absolute path; the lexical absolute form when the
        filesystem refuses resolution.

    Raises:
        ValueError: If ``path`` is ``None``.
    """

    if path is None:
        raise ValueError("path must not be None")

    raw_path = Path(path).expanduser()
    if not raw_path.is_absolute():
        base = Path.cwd() if base_dir is None else Path(base_dir).expanduser()
        raw_path = base / raw_path
    try:
        return raw_path.resolve(strict=False)
    except (OSError, RuntimeError):
        return Path(os.path.normpath(raw_path.absolute()))


def canonical_key(path: _Pathish) -> str:
    """Return the key two paths share iff they name the same filesystem entry."""

    return os.path.normcase(str(absolutize(path)))


def display_relative_path(path: _Pathish, root: _Pathish) -> str:
    """Return a display-friendly representation of ``path`` relative to ``root``.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Relative POSIX path when possible, otherwise the absolute
        POSIX representation.
    """

    candidate = absolutize(path)
    base = absolutize(root)
    try:
        return candidate.relative_to(base).as_posix()
    except ValueError:
        pass
    try:
        return Path(os.path.relpath(candidate, base)).as_posix()
    except ValueError:
        return candidate.as_posix()


def relative_posix(path: _Pathish, base: _Pathish) -> PurePosixPath:
    """Return ``path`` relative to ``base`` using ``/`` separators on every platform."""

    return PurePosixPath(display_relative_path(path, base))


def find_upwards(start: _Pathish, predicate: Callable[[Path], bool]) -> Path | None:
    """Return the nearest directory at or above ``start`` satisfying ``predicate``.

    Args:
        start: Directory (or file, whose parent is used) to begin the search at.
        predicate: Test applied to each candidate directory.

    Returns:
        Path | None: First matching directory, or ``None`` once the
        filesystem root has been checked without a match.
    """

    current = absolutize(start)
    if current.exists() and not current.is_dir():
        current = current.parent
    while True:
        if predicate(current):
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def split_path_list(value: object, *, separator: str = PATH_SEPARATOR) -> list[str]:
    """Split a comma-separated path list, dropping blank entries."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items: Iterable[object] = value
    else:
        items = str(value).split(separator)
    return [text for text in (str(item).strip() for item in items) if text]


def distinct_existing(paths: Iterable[_Pathish]) -> list[Path]:
    """Return the existing entries of ``paths`` with duplicates removed.

    Duplicates are detected by canonical absolute path; the first occurrence
    wins and order is otherwise preserved.
    """

    collected: list[Path] = []
    seen: set[str] = set()
    for path in paths:
        resolved = absolutize(path)
        if not resolved.exists():
            continue
        key = canonical_key(resolved)
        if key in seen:
            continue
        seen.add(key)
        collected.append(resolved)
    return collected


__all__ = (
    "absolutize",
    "canonical_key",
    "display_relative_path",
    "distinct_existing",
    "find_upwards",
    "relative_posix",
    "split_path_list",
)
