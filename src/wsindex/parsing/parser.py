# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JavaScript parsing entry point."""

from __future__ import annotations

from functools import cache
from threading import Lock
from typing import Final

from tree_sitter import Parser as TSParser
from tree_sitter import Tree

from .grammars import build_parser, ensure_language

JAVASCRIPT_GRAMMAR: Final[str] = "javascript"


class JavaScriptParser:
    """Parse JavaScript source into Tree-sitter syntax trees.

    Parsing is total: malformed input yields a tree containing ``ERROR`` and
    missing nodes rather than an exception.
    """

    def __init__(self, grammar_name: str = JAVASCRIPT_GRAMMAR) -> None:
        self.grammar_name = grammar_name
        self._parser: TSParser | None = None
        self._lock = Lock()

    def _get_parser(self) -> TSParser:
        if self._parser is None:
            language = ensure_language(self.grammar_name)
            if language is None:
                raise RuntimeError(
                    f"Tree-sitter grammar '{self.grammar_name}' is unavailable; "
                    f"install tree-sitter-{self.grammar_name}",
                )
            self._parser = build_parser(language)
        return self._parser

    def parse(self, source: bytes | str) -> Tree:
        """Return the syntax tree for ``source``.

        Args:
            source: Source text, either UTF-8 bytes or a string.

        Returns:
            Tree: Tree-sitter syntax tree; offsets are byte offsets into the
            UTF-8 encoding of ``source``.
        """

        payload = source.encode("utf-8") if isinstance(source, str) else source
        with self._lock:
            return self._get_parser().parse(payload)


@cache
def get_parser() -> JavaScriptParser:
    """Return the shared :class:`JavaScriptParser` instance."""

    return JavaScriptParser()


__all__ = ["JAVASCRIPT_GRAMMAR", "JavaScriptParser", "get_parser"]
