# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read JSON manifests that may contain comments."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config.models import ConfigError
from ..constants import PACKAGE_FORMAT_KEY, PACKAGE_TYPE_KEY
from .kinds import PACKAGE_TYPES, ContextKind


def strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas from JSON text.

    Comment markers inside string literals are preserved. Removed comments are
    replaced by whitespace that keeps line numbers stable for error messages.
    """

    out: list[str] = []
    index = 0
    length = len(text)
    in_string = False
    while index < length:
        char = text[index]
        if in_string:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(text[index + 1])
                index += 2
                continue
            if char == '"':
                in_string = False
            index += 1
            continue
        if char == '"':
            in_string = True
            out.append(char)
            index += 1
            continue
        if text.startswith("//", index):
            end = text.find("\n", index)
            index = length if end == -1 else end
            continue
        if text.startswith("/*", index):
            end = text.find("*/", index + 2)
            stop = length if end == -1 else end + 2
            out.append("\n" * text.count("\n", index, stop))
            index = stop
            continue
        if char in "}]":
            _drop_trailing_comma(out)
        out.append(char)
        index += 1
    return "".join(out)


def _drop_trailing_comma(out: list[str]) -> None:
    position = len(out) - 1
    while position >= 0 and out[position].isspace():
        position -= 1
    if position >= 0 and out[position] == ",":
        out[position] = " "


def read_manifest(path: Path) -> dict[str, Any]:
    """Load the manifest at ``path``.

    Args:
        path: JSON manifest, optionally containing comments.

    Returns:
        dict[str, Any]: Parsed top-level object.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or its
            top-level value is not an object.
    """

    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    try:
        data = json.loads(strip_json_comments(text))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path} (line {exc.lineno}, column {exc.colno}): {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Manifest {path} must contain a JSON object")
    return data


def has_format_marker(data: Mapping[str, Any]) -> bool:
    """Return ``True`` when ``data`` carries the package format section."""
    return isinstance(data.get(PACKAGE_FORMAT_KEY), Mapping)


def promote_package_manifest(data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Lift the format section of a package manifest to the top level.

    ``name`` and ``version`` fall back to the outer document when the section
    omits them. The outer document is returned unchanged as the second item.
    """

    outer = dict(data)
    section = outer.get(PACKAGE_FORMAT_KEY)
    if not isinstance(section, Mapping):
        raise ConfigError(f"Package manifest lacks a '{PACKAGE_FORMAT_KEY}' object")
    promoted = dict(section)
    for key in ("name", "version"):
        if key not in promoted and key in outer:
            promoted[key] = outer[key]
    return promoted, outer


def package_kind(data: Mapping[str, Any], default: ContextKind = ContextKind.PACKAGE) -> ContextKind:
    """Return the kind selected by a promoted package manifest's ``type``."""
    declared = data.get(PACKAGE_TYPE_KEY)
    if isinstance(declared, str):
        return PACKAGE_TYPES.get(declared.strip().lower(), default)
    return default


__all__ = [
    "has_format_marker",
    "package_kind",
    "promote_package_manifest",
    "read_manifest",
    "strip_json_comments",
]
