# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Records describing registered classes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..models import Location

if TYPE_CHECKING:
    from .file_symbols import FileSymbols


def append_unique(target: list[str], values: Iterable[str]) -> None:
    """Append each of ``values`` to ``target`` unless already present."""
    for value in values:
        if value and value not in target:
            target.append(value)


@dataclass(eq=False, slots=True)
class ClassRecord:
    """A class registration found in a source file.

    Records compare by identity: the catalog hands back the very record the
    owning :class:`FileSymbols` produced.

    Attributes:
        name: Registered class name.
        location: Span of the registration call.
        origin: Symbol table of the file declaring the class.
        alternate_names: Extra names from ``alternateClassName`` and ``@define``.
        aliases: Aliases from ``alias`` and ``xtype``.
        tags: Tags from ``tags``/``tag`` and ``@tag``.
    """

    name: str
    location: Location
    origin: FileSymbols = field(repr=False)
    alternate_names: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    @property
    def file(self) -> Path:
        return self.location.file

    def iter_names(self) -> Iterator[str]:
        """Yield the class name followed by its alternate names."""
        yield self.name
        yield from self.alternate_names


__all__ = ["ClassRecord", "append_unique"]
