# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project-wide catalog of registered classes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import ClassRecord


class ClassCatalog:
    """Name-indexed, ordered collection of :class:`ClassRecord` objects.

    Class names are unique; :meth:`add` refuses a record whose name is already
    present. Alternate names, aliases and tags resolve to the first record that
    declared them.
    """

    def __init__(self, records: Iterable[ClassRecord] = ()) -> None:
        self._items: list[ClassRecord] = []
        self._by_name: dict[str, ClassRecord] = {}
        self._by_alternate: dict[str, ClassRecord] = {}
        self._by_alias: dict[str, ClassRecord] = {}
        self._by_tag: dict[str, list[ClassRecord]] = {}
        for record in records:
            self.add(record)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ClassRecord]:
        return iter(list(self._items))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"ClassCatalog({len(self._items)} classes)"

    @property
    def items(self) -> list[ClassRecord]:
        return list(self._items)

    @property
    def names(self) -> list[str]:
        return [record.name for record in self._items]

    def add(self, record: ClassRecord) -> bool:
        """Register ``record``; return ``False`` when its name is already taken."""
        if record.name in self._by_name:
            return False
        self._by_name[record.name] = record
        self._items.append(record)
        for alternate in record.alternate_names:
            self._by_alternate.setdefault(alternate, record)
        for alias in record.aliases:
            self._by_alias.setdefault(alias, record)
        for tag in record.tags:
            self._by_tag.setdefault(tag, []).append(record)
        return True

    def by_name(self, name: str) -> ClassRecord | None:
        return self._by_name.get(name)

    def get(self, key: str) -> ClassRecord | None:
        """Look ``key`` up as a class name, alternate name, alias, then tag."""
        for index in (self._by_name, self._by_alternate, self._by_alias):
            record = index.get(key)
            if record is not None:
                return record
        tagged = self._by_tag.get(key)
        return tagged[0] if tagged else None

    def tagged(self, tag: str) -> list[ClassRecord]:
        return list(self._by_tag.get(tag, ()))

    def sort(self) -> ClassCatalog:
        """Sort the records by class name in place."""
        self._items.sort(key=lambda record: record.name)
        return self

    def iter_sorted(self) -> Iterator[ClassRecord]:
        return iter(sorted(self._items, key=lambda record: record.name))


__all__ = ["ClassCatalog"]
