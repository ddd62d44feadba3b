# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Flat, first-write-wins property map built from nested manifests."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Final

from ..constants import PATH_SEPARATOR

Scalar = str | int | float | bool

_REFERENCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([^}]+)\}")
_MAX_EXPANSION_DEPTH: Final[int] = 16


class ListRule(str, Enum):
    """How lists of scalars found in a manifest are flattened."""

    JOIN = "join"
    INDEX = "index"


def is_scalar(value: object) -> bool:
    """Return ``True`` for the value types a property map stores."""
    return isinstance(value, (str, int, float, bool))


class PropertyMap(Mapping[str, Scalar]):
    """Ordered mapping of dotted property names to scalar values.

    The first value registered for a key is kept; later writes to the same key
    are ignored. Contexts rely on this by flattening their own manifest before
    the inherited ones.
    """

    def __init__(self, *, list_rule: ListRule = ListRule.JOIN, separator: str = PATH_SEPARATOR) -> None:
        self._props: dict[str, Scalar] = {}
        self.list_rule = list_rule
        self.separator = separator

    def __getitem__(self, key: str) -> Scalar:
        return self._props[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"PropertyMap({self._props!r})"

    def add(self, key: str, value: Any) -> bool:
        """Register ``value`` under ``key`` unless the key is already set.

        Args:
            key: Dotted property name.
            value: Scalar value; anything else is ignored.

        Returns:
            bool: ``True`` when the value was stored.
        """
        if key in self._props or not is_scalar(value):
            return False
        self._props[key] = value
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self._props.get(key, default)

    def flatten(self, prefix: str, data: Any) -> PropertyMap:
        """Register every leaf scalar of ``data`` under ``prefix``.

        Args:
            prefix: Dotted prefix for all keys (may be empty).
            data: Nested mapping, list or scalar loaded from a manifest.

        Returns:
            PropertyMap: ``self`` to allow chaining.
        """
        if isinstance(data, Mapping):
            for key, value in data.items():
                self.flatten(f"{prefix}.{key}" if prefix else str(key), value)
        elif isinstance(data, (list, tuple)):
            self._flatten_list(prefix, data)
        elif prefix:
            self.add(prefix, data)
        return self

    def _flatten_list(self, prefix: str, items: list[Any] | tuple[Any, ...]) -> None:
        if self.list_rule is ListRule.JOIN and all(is_scalar(item) for item in items):
            self.add(prefix, self.separator.join(_stringify(item) for item in items))
            return
        for index, item in enumerate(items):
            self.flatten(f"{prefix}.{index}", item)

    def expand(self, text: str) -> str:
        """Substitute ``${key}`` references in ``text`` with stored values.

        References to unknown keys are left untouched. Values are expanded
        recursively up to a fixed depth so cyclic references terminate.
        """
        result = text
        for _ in range(_MAX_EXPANSION_DEPTH):
            expanded = _REFERENCE_PATTERN.sub(self._substitute, result)
            if expanded == result:
                break
            result = expanded
        return result

    def resolve(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` with references expanded."""
        value = self._props.get(key, default)
        if isinstance(value, str):
            return self.expand(value)
        return value

    def _substitute(self, match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if name not in self._props:
            return match.group(0)
        return _stringify(self._props[name])


def _stringify(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = ["ListRule", "PropertyMap", "Scalar", "is_scalar"]
