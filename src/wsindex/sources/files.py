# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lazily parsed source file handles and their ordered collection."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator
from os import PathLike

from tree_sitter import Tree

from ..config.models import ConfigError
from ..filesystem.paths import absolutize, canonical_key
from ..parsing.parser import JavaScriptParser, get_parser


class SourceFile:
    """A source file whose bytes and syntax tree are loaded on first access.

    Both are cached for the lifetime of the handle, so offsets taken from the
    tree stay valid until :meth:`reset` is called.
    """

    def __init__(self, path: str | PathLike[str], *, parser: JavaScriptParser | None = None) -> None:
        self.path = absolutize(path)
        self.key = canonical_key(self.path)
        self._parser = parser
        self._source: bytes | None = None
        self._tree: Tree | None = None
        self._line_starts: list[int] | None = None

    def __repr__(self) -> str:
        return f"SourceFile({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def source(self) -> bytes:
        """Raw file content.

        Raises:
            ConfigError: If the file can no longer be read.
        """
        if self._source is None:
            try:
                self._source = self.path.read_bytes()
            except OSError as exc:
                raise ConfigError(f"Unable to read source file {self.path}: {exc}") from exc
        return self._source

    @property
    def text(self) -> str:
        return self.source.decode("utf-8", errors="replace")

    @property
    def tree(self) -> Tree:
        """Syntax tree of the file, parsed once and then reused."""
        if self._tree is None:
            parser = self._parser or get_parser()
            self._tree = parser.parse(self.source)
        return self._tree

    @property
    def is_parsed(self) -> bool:
        return self._tree is not None

    @property
    def has_syntax_errors(self) -> bool:
        return self.tree.root_node.has_error

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of a byte ``offset``."""
        if self._line_starts is None:
            starts = [0]
            source = self.source
            index = source.find(b"\n")
            while index != -1:
                starts.append(index + 1)
                index = source.find(b"\n", index + 1)
            self._line_starts = starts
        offset = max(0, min(offset, len(self.source)))
        line = bisect_right(self._line_starts, offset) - 1
        return line + 1, offset - self._line_starts[line] + 1

    def reset(self) -> None:
        """Drop the cached content and tree so the next access re-reads the file."""
        self._source = None
        self._tree = None
        self._line_starts = None


class SourceFileList:
    """Ordered, duplicate-free collection of :class:`SourceFile` handles.

    Files are keyed by canonical path; removal is by identity so a stale
    handle cannot evict a newer one registered for the same path.
    """

    def __init__(self) -> None:
        self._items: list[SourceFile] = []
        self._by_key: dict[str, SourceFile] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(list(self._items))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, SourceFile):
            return self._by_key.get(item.key) is item
        if isinstance(item, (str, PathLike)):
            return canonical_key(item) in self._by_key
        return False

    @property
    def items(self) -> tuple[SourceFile, ...]:
        return tuple(self._items)

    def keys(self) -> list[str]:
        return list(self._by_key)

    def get(self, path: str | PathLike[str]) -> SourceFile | None:
        """Return the handle registered for ``path``, if any."""
        return self._by_key.get(canonical_key(path))

    def add(self, file: SourceFile) -> bool:
        """Append ``file`` unless a handle for the same path is already present."""
        if file.key in self._by_key:
            return False
        self._by_key[file.key] = file
        self._items.append(file)
        return True

    def remove(self, file: SourceFile) -> bool:
        """Remove ``file`` when it is the registered handle for its path."""
        if self._by_key.get(file.key) is not file:
            return False
        del self._by_key[file.key]
        self._items = [item for item in self._items if item is not file]
        return True

    def clear(self) -> None:
        self._items.clear()
        self._by_key.clear()


__all__ = ["SourceFile", "SourceFileList"]
