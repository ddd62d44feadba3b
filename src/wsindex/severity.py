# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Totally ordered severity levels used by the diagnostic manager."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def _missing_(cls, value: object) -> Severity | None:
        """Accept common spellings such as ``"WARNING"`` or ``"Err"``."""
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        alias = _SEVERITY_ALIASES.get(lowered, lowered)
        for member in cls:
            if member.value == alias:
                return member
        return None

    @property
    def rank(self) -> int:
        """Return the ordinal used to compare severities."""
        return _SEVERITY_RANK[self]

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_RANK: Final[Mapping[Severity, int]] = {
    Severity.DEBUG: 0,
    Severity.INFO: 1,
    Severity.WARN: 2,
    Severity.ERROR: 3,
}

_SEVERITY_ALIASES: Final[Mapping[str, str]] = {
    "dbg": "debug",
    "log": "debug",
    "inf": "info",
    "warning": "warn",
    "wrn": "warn",
    "err": "error",
}

# Three-letter tags used when rendering diagnostics as plain text.
SEVERITY_TAGS: Final[Mapping[Severity, str]] = {
    Severity.DEBUG: "DBG",
    Severity.INFO: "INF",
    Severity.WARN: "WRN",
    Severity.ERROR: "ERR",
}


def coerce_severity(value: Severity | str) -> Severity:
    """Return ``value`` as a :class:`Severity`.

    Args:
        value: Severity member or textual severity name.

    Returns:
        Severity: Matching severity member.

    Raises:
        ValueError: If ``value`` does not name a known severity.
    """
    if isinstance(value, Severity):
        return value
    return Severity(value)


def severity_tag(severity: Severity) -> str:
    """Return the three-letter tag rendered in front of diagnostic text."""
    return SEVERITY_TAGS[severity]


__all__ = ["SEVERITY_TAGS", "Severity", "coerce_severity", "severity_tag"]
