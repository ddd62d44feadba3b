# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core location models shared by the source loader, symbols and diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple


class Span(NamedTuple):
    """Half-open ``[start, end)`` byte offset range inside a source file."""

    start: int
    end: int

    @classmethod
    def coerce(cls, value: Span | tuple[int, int] | Mapping[str, int] | object) -> Span:
        """Build a span from a tuple, a ``{start, end}`` mapping or any object exposing both.

        Args:
            value: Candidate range description.

        Returns:
            Span: Normalised span.

        Raises:
            TypeError: If ``value`` carries no ``start``/``end`` pair.
        """
        if isinstance(value, Span):
            return value
        if isinstance(value, Mapping):
            return cls(int(value["start"]), int(value["end"]))
        if isinstance(value, tuple) and len(value) == 2:
            return cls(int(value[0]), int(value[1]))
        start = getattr(value, "start", None)
        end = getattr(value, "end", None)
        if start is None or end is None:
            raise TypeError(f"cannot interpret {value!r} as a span")
        return cls(int(start), int(end))


@dataclass(frozen=True, slots=True)
class Location:
    """Precise location of a span within a file.

    Attributes:
        start: Start byte offset.
        end: End byte offset (exclusive).
        file: Absolute path of the file containing the span.
        line: 1-based line of ``start``.
        column: 1-based column of ``start``.
    """

    start: int
    end: int
    file: Path
    line: int
    column: int

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def describe(self, path: str | None = None) -> str:
        """Return ``path:line:column`` using ``path`` in place of the absolute file."""
        return f"{path if path is not None else self.file}:{self.line}:{self.column}"


__all__ = ["Location", "Span"]
