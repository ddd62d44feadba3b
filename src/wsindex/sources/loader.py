# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve and hold the source files a context contributes."""

from __future__ import annotations

import asyncio
import logging
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING

from ..config.models import IndexConfig
from ..diagnostics.manager import DiagnosticManager
from ..parsing.parser import JavaScriptParser, get_parser
from .files import SourceFile, SourceFileList

if TYPE_CHECKING:
    from ..workspace.context import Context

LOGGER = logging.getLogger(__name__)


class Sources:
    """Ordered, deduplicated set of source files loaded from one or more contexts.

    Loading a context appends its class files followed by its override files;
    files already present (by canonical path) are skipped. Each file is parsed
    lazily on first access to its tree.
    """

    def __init__(
        self,
        workspace: Context | None = None,
        manager: DiagnosticManager | None = None,
        *,
        config: IndexConfig | None = None,
        parser: JavaScriptParser | None = None,
    ) -> None:
        self.workspace = workspace
        if manager is None:
            manager = workspace.manager if workspace is not None else DiagnosticManager()
        self.manager = manager
        if config is None:
            config = workspace.config if workspace is not None else IndexConfig()
        self.config = config
        self.parser = parser or get_parser()
        self.files = SourceFileList()
        self.contexts: list[Context] = []

    def __len__(self) -> int:
        return len(self.files)

    async def load(self, context: Context) -> Sources:
        """Append the class and override files of ``context``.

        The filesystem walk runs on a worker thread; callers must await the
        result before building a symbol index over the collection.

        Args:
            context: App or package context whose files should be loaded.

        Returns:
            Sources: ``self`` for chaining.

        Raises:
            ConfigError: If the context's classpath cannot be resolved.
        """
        paths = await asyncio.to_thread(_collect_paths, context)
        added = sum(1 for path in paths if self._add_path(path)[1])
        self.contexts.append(context)
        LOGGER.debug("loaded %d of %d source files from %s", added, len(paths), context.dir)
        return self

    def add(self, path: str | PathLike[str]) -> SourceFile:
        """Register ``path`` and return its handle (the existing one if already present)."""
        return self._add_path(path)[0]

    def remove(self, item: SourceFile | str | PathLike[str]) -> bool:
        """Remove a file by handle or by path."""
        if isinstance(item, SourceFile):
            return self.files.remove(item)
        existing = self.files.get(item)
        return existing is not None and self.files.remove(existing)

    def _add_path(self, path: str | PathLike[str]) -> tuple[SourceFile, bool]:
        existing = self.files.get(path)
        if existing is not None:
            return existing, False
        file = SourceFile(path, parser=self.parser)
        self.files.add(file)
        return file, True


def _collect_paths(context: Context) -> list[Path]:
    return [*context.class_files(), *context.override_files()]


__all__ = ["Sources"]
