# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tree-sitter backed JavaScript parsing."""

from __future__ import annotations

from .grammars import build_parser, ensure_language
from .helpers import (
    first_syntax_error,
    iter_tree_nodes,
    node_text,
    preceding_comments,
    property_key,
    string_value,
)
from .parser import JAVASCRIPT_GRAMMAR, JavaScriptParser, get_parser

__all__ = [
    "JAVASCRIPT_GRAMMAR",
    "JavaScriptParser",
    "build_parser",
    "ensure_language",
    "first_syntax_error",
    "get_parser",
    "iter_tree_nodes",
    "node_text",
    "preceding_comments",
    "property_key",
    "string_value",
]
