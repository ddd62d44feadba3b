# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incrementally maintained symbol index over a :class:`Sources` collection."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from os import PathLike

from ..config.models import IndexConfig
from ..constants import CODE_DUPLICATE_CLASS
from ..diagnostics.manager import DiagnosticManager
from ..filesystem.paths import canonical_key
from ..severity import Severity
from ..sources.files import SourceFile
from ..sources.loader import Sources
from .catalog import ClassCatalog
from .file_symbols import FileSymbols
from .models import ClassRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """File tables attached and detached by one :meth:`Symbols.sync` call."""

    added: tuple[FileSymbols, ...] = ()
    removed: tuple[FileSymbols, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class SymbolFiles:
    """Ordered collection of the file symbol tables attached to an index."""

    def __init__(self) -> None:
        self._by_key: dict[str, FileSymbols] = {}

    def __len__(self) -> int:
        return len(self._by_key)

    def __iter__(self) -> Iterator[FileSymbols]:
        return iter(list(self._by_key.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    @property
    def items(self) -> tuple[FileSymbols, ...]:
        return tuple(self._by_key.values())

    def keys(self) -> list[str]:
        return list(self._by_key)

    def get(self, path: str | PathLike[str]) -> FileSymbols | None:
        return self._by_key.get(canonical_key(path))

    def _attach(self, symbols: FileSymbols) -> None:
        self._by_key[symbols.key] = symbols

    def _detach(self, symbols: FileSymbols) -> None:
        if self._by_key.get(symbols.key) is symbols:
            del self._by_key[symbols.key]


class Symbols:
    """Class index built from every file of a :class:`Sources` collection.

    A :class:`FileSymbols` table is built for each file when the index is
    created. The merged :attr:`classes` catalog is built on first access and
    kept until :meth:`sync` observes a change in the file set.

    Example:
        >>> sources = asyncio.run(app.load_sources())  # doctest: +SKIP
        >>> symbols = Symbols(sources)  # doctest: +SKIP
        >>> symbols.classes.get("widget.main")  # doctest: +SKIP
    """

    def __init__(
        self,
        sources: Sources,
        manager: DiagnosticManager | None = None,
        config: IndexConfig | None = None,
    ) -> None:
        self.sources = sources
        self.manager = manager or sources.manager
        self.config = config or sources.config
        self.files = SymbolFiles()
        self._classes: ClassCatalog | None = None
        self._reported_duplicates: set[tuple[str, str, str]] = set()
        for file in sources.files:
            self._attach(file)

    @property
    def classes(self) -> ClassCatalog:
        """Catalog of every class declared by the attached files."""
        if self._classes is None:
            self._classes = self._build_catalog()
        return self._classes

    def sync(self) -> SyncResult:
        """Reconcile the attached tables with the files currently in :attr:`sources`.

        Tables whose file left the collection, or was replaced by a new handle
        for the same path, are detached; tables are built for new files only.
        Duplicate-name reports involving a detached file are forgotten so a
        re-added file reports them again.
        The catalog is rebuilt lazily when anything changed.

        Returns:
            SyncResult: Tables attached and detached by this call.
        """
        current: dict[str, SourceFile] = {file.key: file for file in self.sources.files}
        removed = tuple(
            table for table in self.files if current.get(table.key) is not table.file
        )
        for table in removed:
            self.files._detach(table)
        if removed:
            detached = {table.key for table in removed}
            self._reported_duplicates = {
                entry for entry in self._reported_duplicates if entry[1] not in detached and entry[2] not in detached
            }
        added = tuple(self._attach(file) for key, file in current.items() if key not in self.files)
        result = SyncResult(added=added, removed=removed)
        if result.changed:
            self._classes = None
            LOGGER.debug("sync attached %d and detached %d files", len(added), len(removed))
        return result

    def _attach(self, file: SourceFile) -> FileSymbols:
        table = FileSymbols(
            file,
            manager=self.manager,
            registration_functions=self.config.symbols.registration_functions,
        )
        self.files._attach(table)
        return table

    def _build_catalog(self) -> ClassCatalog:
        catalog = ClassCatalog()
        for table in self.files:
            for record in table.classes:
                if not catalog.add(record):
                    self._report_duplicate(catalog.by_name(record.name), record)
        LOGGER.debug("catalogued %d classes from %d files", len(catalog), len(self.files))
        return catalog

    def _report_duplicate(self, first: ClassRecord | None, duplicate: ClassRecord) -> None:
        if first is None:
            return
        key = (duplicate.name, first.origin.key, duplicate.origin.key)
        if key in self._reported_duplicates:
            return
        self._reported_duplicates.add(key)
        where = first.location.describe(self.manager.display_path(first.file))
        self.manager.report(
            CODE_DUPLICATE_CLASS,
            Severity.ERROR,
            f'Duplicate class name "{duplicate.name}" (first defined at {where})',
            duplicate.location,
        )


__all__ = ["SymbolFiles", "Symbols", "SyncResult"]
